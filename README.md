# bookcheck

Metrics, badge maintenance and a custom linter for a book written as a tree
of Markdown sections and SVG diagrams.

The tool walks a book source directory and sorts every `.md` and `.svg` file
into a chapter by the nearest `chpN` (or `chpN_appendix`) directory in its
path. Files under no chapter directory count as front matter (chapter 0).
It can then:

* report word counts, page estimates (500 words per page) and diagram counts
  per chapter and for the whole book;
* rewrite the page and diagram count badges in `landing.md` inside the
  source directory and in `README.md` one level above it, and put the
  standard social meta tags at the top of every section;
* lint the sources: front matter, chapter intros (`_index.md`), chapter
  sections and SVG diagrams each have their own set of rules (heading
  levels, header and footer separators, footnotes, required meta tags,
  centred SVG figures, no draft paths, no scripts inside SVGs).

## Installation

```
pip install .
```

## Command line

At least one of `--metrics`, `--lint` or `--update` is required:

```
bookcheck --metrics
bookcheck --lint
bookcheck --lint --log-warn
bookcheck --update
bookcheck --metrics --lint --log-warn --src-dir path/to/src
```

* `-m`, `--metrics` prints per-chapter and total counts.
* `-l`, `--lint` runs the four linters in turn (front matter, chapter
  intros, chapter sections, SVGs). The first failure is printed to standard
  error and the command exits with status 1; otherwise it prints `Lint OK`.
* `--log-warn` (only with `--lint`) prints warning-level findings instead
  of treating them as errors.
* `-u`, `--update` rewrites the count badges and meta tags in place and
  prints `Updates OK`. Both `landing.md` and the `README.md` above the
  source directory must exist.
* `--src-dir` sets the book source directory (default `../../src`).
* `--version` prints the version.

## Library use

```python
from bookcheck.book import Book

book = Book.load("src", collect_section_data=True)
print(book.render())

for linter in (
    book.non_chp_linter(),
    book.chp_intro_linter(),
    book.chp_sections_linter(),
    book.svg_linter(),
):
    linter.run(log_warn=True)
```

* `Book.load(src_dir, collect_section_data)` gathers the files into
  `Chapter` objects kept in `Book.chapters`, ordered by chapter number.
  Lines are only kept when `collect_section_data` is true; linting content
  without its lines fails with "Empty content".
* `Book.word_count()`, `Book.diagram_count()` and `Book.render()` (and the
  same methods on `Chapter`) give the metrics; `bookcheck.book.count_words`
  counts the words of a list of lines, ignoring meta tag lines.
* `Linter.run(log_warn)` raises `bookcheck.errors.LeveledLintError` on the
  first fatal finding, or on a warning when `log_warn` is false. Linters can
  be assembled by hand with `Linter.builder()`, `add_rule(level, rule)`,
  `add_content(content)` and `build()`.
* The rules live in `bookcheck.rules` (`rule_nonempty`,
  `rule_no_draft_path`, `rule_has_svg`, `rule_footer`,
  `rule_header_and_footer`, `rule_heading_sizes`, `rule_meta_tags`,
  `rule_md_extension`, `rule_valid_svg`). Each takes a path and a list of
  lines and raises `bookcheck.errors.LintError`, carrying the line number,
  the line and the reason.
* `bookcheck.update.update_badges(book, src_dir)` and
  `bookcheck.update.update_meta_tags(book)` are the rewrites behind
  `--update`; `bookcheck.metatags` holds the tag list and helpers.

## Limits

* Chapter numbers come from the path as given. When the source directory is
  given as an absolute path, files outside any `chpN` directory have no
  chapter and are left out of the book, front matter included; pass a
  relative path to keep them.
* SVG checking reads tags, comments, declarations and CDATA sections for
  well-formedness and scripts only; it is not a full XML or SVG validator.

## Running the tests

```
pip install .[test]
pytest
```
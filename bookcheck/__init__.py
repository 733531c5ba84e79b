"""Word, page and diagram metrics, badge updates and linting for Markdown book sources."""

__version__ = "0.1.0"
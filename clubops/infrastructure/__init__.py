"""Infrastructure: SQLAlchemy persistence and JWT security."""

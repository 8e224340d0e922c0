"""SQLAlchemy persistence for the SQL-backed quota store."""

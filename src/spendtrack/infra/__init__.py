"""Infrastructure: database wiring and SQLModel repositories."""

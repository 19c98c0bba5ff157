"""Infrastructure layer - configuration, logging and the remote cart source."""

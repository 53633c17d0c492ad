"""Auth Service: registration, login and signed session tokens."""

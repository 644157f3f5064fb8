"""Authentication use-cases: login, registration and refresh-token rotation."""

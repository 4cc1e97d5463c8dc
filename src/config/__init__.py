"""Configuration: typed settings loaded from the environment."""

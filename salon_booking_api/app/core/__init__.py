"""Configuration, storage, security and error primitives shared by the app."""

"""Infrastructure: persistence and security implementations of application ports."""

"""Core scaffolding utilities: env file rendering, template copying, configuration."""

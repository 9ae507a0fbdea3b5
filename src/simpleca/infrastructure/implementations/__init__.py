"""Infrastructure implementations by provider."""

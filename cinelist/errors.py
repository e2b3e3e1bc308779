"""Errors raised by the service layer around the extraction core."""


class ConfigurationError(RuntimeError):
	"""A required credential or setting is missing."""


class UpstreamServiceError(RuntimeError):
	"""TMDB or the generative service failed to answer."""

	def __init__(self, service: str, message: str):
		super().__init__(f"{service}: {message}")
		self.service = service  # "tmdb" or "gemini"
		self.detail = message  # logged, not shown to API clients

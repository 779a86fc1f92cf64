#============================================
class BoxError(RuntimeError):
	"""
	Base class for every failure raised by productive-box.
	"""


#============================================
class SettingsError(BoxError):
	"""
	Raised when required settings are missing or invalid.
	"""


#============================================
class AuthenticationMissingError(BoxError):
	"""
	Raised when no GitHub token is configured before a query.
	"""


#============================================
class TransportError(BoxError):
	"""
	Raised when the GraphQL endpoint cannot be reached or answers non-2xx.
	"""

	def __init__(self, message: str, status_code: int | None = None, status_text: str = ""):
		super().__init__(message)
		self.status_code = status_code
		self.status_text = status_text


#============================================
class IdentityResolutionError(BoxError):
	"""
	Raised when the viewer login and id cannot be resolved.
	"""


#============================================
class RepositoryListError(BoxError):
	"""
	Raised when contributed repositories cannot be listed.
	"""


#============================================
class NoCommitsFoundError(BoxError):
	"""
	Raised when every day segment is empty.
	"""


#============================================
class PublishError(BoxError):
	"""
	Raised when the gist update fails.
	"""


#============================================
class PublishTargetEmptyError(PublishError):
	"""
	Raised when the target gist has no file to overwrite.
	"""


#============================================
class InvalidArgumentError(BoxError, ValueError):
	"""
	Raised for out-of-range percent, width, or hour values.
	"""

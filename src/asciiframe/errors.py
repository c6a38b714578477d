ERROR_DATA = "Invalid image dimensions"
ERROR_RESIZE = "Failed to resize image"


class PipelineError(Exception):
    """Raised when an image cannot be resized for rendering."""

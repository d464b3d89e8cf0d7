from organlens.orchestrator.contracts import ClassificationError

# Intent / capture outcome codes
ERR_BUSY = "BUSY"
ERR_WRONG_MODE = "WRONG_MODE"
ERR_PERMISSION_DENIED = "PERMISSION_DENIED"
ERR_CAPTURE_FAILED = "CAPTURE_FAILED"
ERR_RECORDING_ACTIVE = "RECORDING_ACTIVE"
ERR_RECORDING_FAILED = "RECORDING_FAILED"

# Classification error kinds (ClassificationError.kind)
ERR_TRANSPORT = "TRANSPORT"
ERR_SERVER = "SERVER_ERROR"
ERR_PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
ERR_MALFORMED = "MALFORMED_RESPONSE"

OVERSIZE_MARKER = "Request Entity Too Large"


def message_for(error: ClassificationError) -> str:
    """User-facing text for a classification error."""
    if error.kind == ERR_SERVER:
        return f"Server error: {error.status_code}. Please try again."
    if error.kind == ERR_PAYLOAD_TOO_LARGE:
        return "Image too large. Please try again with a simpler image."
    if error.kind == ERR_MALFORMED:
        return "Invalid response from server. Please try again."
    return "Failed to process image. Please try again."

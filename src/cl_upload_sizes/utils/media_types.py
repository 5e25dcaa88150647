import magic

DEFAULT_MIME_TYPE = "application/octet-stream"


def determine_mime_type(buffer: bytes) -> str:
    """Sniff the MIME type of buffer with libmagic."""
    mime = magic.Magic(mime=True)

    mime_type = mime.from_buffer(buffer)
    if not mime_type:
        mime_type = DEFAULT_MIME_TYPE
    return mime_type

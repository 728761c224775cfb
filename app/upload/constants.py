ALLOWED_IMAGE_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"}
)

FOLDER_PATTERN = r"^[a-zA-Z0-9_-]+(?:/[a-zA-Z0-9_-]+)*$"

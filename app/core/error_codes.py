# Error codes returned in the "error_code" field of every error response.

# Invalid input
INVALID_INPUT = "INVALID_INPUT"

# Conflicts
USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
ALREADY_FOLLOWING = "ALREADY_FOLLOWING"
NOT_FOLLOWING = "NOT_FOLLOWING"
CANNOT_FOLLOW_SELF = "CANNOT_FOLLOW_SELF"

# Authentication
NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
INVALID_TOKEN = "INVALID_TOKEN"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
USER_NOT_FOUND = "USER_NOT_FOUND"

# Missing users
USER_DOES_NOT_EXIST = "USER_DOES_NOT_EXIST"
TARGET_USER_NOT_FOUND = "TARGET_USER_NOT_FOUND"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"

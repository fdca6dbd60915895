MS_PER_SECOND = 1000
MS_PER_HOUR = 3_600_000

NO_PROJECT_LABEL = "No Project"
TEXT_SIZES = ("small", "medium", "large")
DEFAULT_TEXT_SIZE = "medium"

REQUEST_PENDING = "pending"
REQUEST_APPROVED = "approved"
REQUEST_REJECTED = "rejected"

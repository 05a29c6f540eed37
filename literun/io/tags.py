"""Tag constants for log routing."""

TAGS: set[str] = {
    "snippet-in",
    "snippet-out",
    "evaluation-failed",
}

FAILURE_TAGS: set[str] = {"evaluation-failed"}

TRANSCRIPT_TAGS: set[str] = TAGS

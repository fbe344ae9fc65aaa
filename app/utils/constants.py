PLATFORM_STATES = {
    "PENDING",
    "APPROVED",
    "DELETED",
}

REVIEW_STATES = {
    "VISIBLE",
    "FLAGGED",
    "APPROVED",
    "REJECTED",
}

# offered on the submission form; custom tags are merged in alongside these
PREDEFINED_TAGS = [
    "API",
    "Audio",
    "Chatbot",
    "Code Generation",
    "Enterprise",
    "Image Generation",
    "Language Model",
    "NLP",
    "Open Source",
    "Productivity",
    "Video",
    "Writing",
]

# Filter constants
FILTER_DEBOUNCE_MS = 250  # Debounce time for client-side search in milliseconds

# Infinite scroll constants
SCROLL_THRESHOLD_LINES = 8  # Load more when the viewport is this many rows from the bottom

# Worker groups
FETCH_WORKER_GROUP = "feed-fetch"

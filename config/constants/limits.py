"""
==========================================================
LIMITS, THRESHOLDS & METRICS
==========================================================
All numeric limits, pagination, timeouts and retry thresholds.
Change once here → applies everywhere.
"""

# --- Pagination ---
PAGINATION_DEFAULT = 10
PAGINATION_MAX = 100
PAGINATION_NOTIFICATIONS = 20
PAGINATION_CHAT_MESSAGES = 50

# --- Dashboard ---
DASHBOARD_RECENT_ITEMS = 10      # how many AdminLog rows to show as recent activity

# --- Analytics ---
ANALYTICS_DEFAULT_DAYS = 30
ANALYTICS_MAX_DAYS = 365

# --- Jobs ---
JOB_TITLE_MAX_LENGTH = 200
JOB_DEFAULT_TTL_DAYS = 30        # expires_at = created + TTL when not given

# --- Moderation ---
REASON_MAX_LENGTH = 2000

# --- Real-time push ---
PUSH_TIMEOUT_SECONDS = 5         # bounded publish so a slow provider can't stall a request
PUSH_EVENT_NOTIFICATION = 'new-notification'
PUSH_EVENT_GLOBAL = 'global-notification'
PUSH_GLOBAL_CHANNEL = 'global'

# --- Outbox worker ---
OUTBOX_BATCH_SIZE = 100
OUTBOX_MAX_ATTEMPTS = 5
OUTBOX_POLL_INTERVAL_SECONDS = 5
OUTBOX_CLAIM_TIMEOUT_SECONDS = 300  # a SENDING row older than this is assumed abandoned and reclaimed
OUTBOX_BACKLOG_WARNING = 500     # health check warns above this many pending deliveries

# --- REST client ---
API_CLIENT_TIMEOUT_SECONDS = 30

"""
Application constants for ZenCure.

Scoring weights for remedy relevance and the value sets used by moderation
and role checks.
"""

# =============================================================================
# Moderation
# =============================================================================

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_FLAGGED = "flagged"

MODERATION_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_FLAGGED)

# =============================================================================
# Roles
# =============================================================================

ROLE_USER = "user"
ROLE_MODERATOR = "moderator"
ROLE_ADMIN = "admin"

USER_ROLES = (ROLE_USER, ROLE_MODERATOR, ROLE_ADMIN)
PRIVILEGED_ROLES = frozenset({ROLE_MODERATOR, ROLE_ADMIN})

# =============================================================================
# Relevance Scoring Weights
# =============================================================================

# avg_rating (0-5) -> 0-50 points
RATING_WEIGHT = 10.0

# relevance_score (0-100) -> 0-10 points per matching symptom
SYMPTOM_RELEVANCE_DIVISOR = 10.0

# mean credibility (1-10) -> 2-20 points
CREDIBILITY_WEIGHT = 2.0

# Recency: up to 10 points, losing one point every 30 days
RECENCY_MAX_POINTS = 10.0
RECENCY_DECAY_DAYS = 30.0

SECONDS_PER_DAY = 60 * 60 * 24

# =============================================================================
# Value Ranges
# =============================================================================

MIN_REVIEW_SCORE = 1
MAX_REVIEW_SCORE = 5

MIN_SYMPTOM_RELEVANCE = 0
MAX_SYMPTOM_RELEVANCE = 100

MIN_CREDIBILITY = 1
MAX_CREDIBILITY = 10

# Rounding applied to the derived average rating
AVG_RATING_DECIMALS = 1

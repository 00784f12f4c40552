"""
Shared module for code common to the REST API, the CLI and the tests.

STRUCTURE:
- shared.security: Authentication and authorization
  - auth.py: JWT signing/verification, current_user_context, require_roles, role_guard

- shared.infrastructure: Database and request plumbing
  - db.py: Async SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, order statuses, error messages

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Request/response Pydantic schemas
  - visit_time.py: Visit time range codec

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, OrderStatus
    from shared.utils.exceptions import NotFoundError, NoPlaceError
"""

"""HTTP routes exposed by the API process."""

from newsdesk.routes.publish import router as publish_router
from newsdesk.routes.stories import router as stories_router

__all__ = ["publish_router", "stories_router"]

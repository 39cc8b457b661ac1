"""search-index — derived JSON search documents for published content.

Rebuilds ``search/index.json`` (and, when enabled, ``search/resource-tags.json``)
from the content and settings stores whenever a relevant change event fires.
"""

__version__ = "0.2.0"

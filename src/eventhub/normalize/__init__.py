from eventhub.normalize.slug import slugify
from eventhub.normalize.temporal import normalize_date, normalize_time

__all__ = ["slugify", "normalize_date", "normalize_time"]

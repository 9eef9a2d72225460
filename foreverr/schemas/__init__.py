"""
Schemas package
Only the shared schemas are exposed here; import feature schemas from their modules
"""

from .commons_schemas import Page, paginate

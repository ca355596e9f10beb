"""
Utils Package - Centralized utility modules initialization

Only model-free modules are re-exported here; data, notifications and seed
import the models and are imported from their own modules.
"""

from .decorators import is_admin_user, admin_required, api_admin_required
from .security import get_client_ip, get_user_agent, validate_password_change
from .cache import ContentCache, content_cache, cache_key
from .validation import (
    ValidationError,
    clean_contact,
    clean_registration,
    clean_contact_update,
    clean_project,
    clean_skill,
    clean_blog,
    clean_order_items
)
from .helpers import (
    slugify,
    split_list,
    parse_json_list,
    parse_bool,
    parse_int,
    get_page_number,
    get_pagination_args,
    build_pagination,
    total_pages,
    group_by_category,
    render_content
)

__all__ = [
    # Decorators
    'is_admin_user',
    'admin_required',
    'api_admin_required',

    # Security
    'get_client_ip',
    'get_user_agent',
    'validate_password_change',

    # Cache
    'ContentCache',
    'content_cache',
    'cache_key',

    # Validation
    'ValidationError',
    'clean_contact',
    'clean_registration',
    'clean_contact_update',
    'clean_project',
    'clean_skill',
    'clean_blog',
    'clean_order_items',

    # Helpers
    'slugify',
    'split_list',
    'parse_json_list',
    'parse_bool',
    'parse_int',
    'get_page_number',
    'get_pagination_args',
    'build_pagination',
    'total_pages',
    'group_by_category',
    'render_content'
]

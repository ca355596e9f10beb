"""
Helpers Module - Utility functions for common operations
"""

import re
import json
from flask import request, current_app
from markupsafe import Markup, escape


MAX_PAGE_LIMIT = 100
MAX_PAGE = 10000

CATEGORY_ICONS = {
    'frontend': 'laptop-code',
    'backend': 'server',
    'database': 'database',
    'devops': 'cloud',
    'tools': 'tools',
    'soft-skills': 'users',
    'other': 'cog',
}

CATEGORY_DESCRIPTIONS = {
    'frontend': 'User interface development and client-side technologies',
    'backend': 'Server-side development and API creation',
    'database': 'Data storage, management, and optimization',
    'devops': 'Deployment, infrastructure, and automation',
    'tools': 'Development tools and productivity software',
    'soft-skills': 'Communication, leadership, and collaboration',
    'other': 'Additional skills and technologies',
}


def slugify(title):
    """Derive a URL-safe slug: lowercase, non-alphanumeric runs become one hyphen"""
    if not title:
        return ''
    slug = re.sub(r'[^a-z0-9]+', '-', str(title).lower())
    return slug.strip('-')


def split_list(value):
    """Normalize a comma-separated string or a list into trimmed, non-empty strings"""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(',')
    elif isinstance(value, (list, tuple)):
        items = [v for v in value if isinstance(v, str)]
    else:
        return []
    return [item.strip() for item in items if item.strip()]


def parse_json_list(value):
    """Read a JSON list column defensively, falling back to an empty list"""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, (str, bytes)):
        try:
            parsed = json.loads(value)
        except (ValueError, TypeError):
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def parse_bool(value):
    """Interpret checkbox and JSON boolean values"""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ('true', 'on', '1', 'yes')


def parse_int(value, default=None):
    """Parse an integer, returning default when the value is blank or invalid"""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        return default


def get_page_number():
    """Requested page, clamped to 1..MAX_PAGE so offsets stay inside an SQL integer"""
    page = parse_int(request.args.get('page'), 1)
    return min(max(page, 1), MAX_PAGE)


def get_pagination_args(default_limit=10):
    """Read page/limit from the query string. Returns (page, limit, offset)."""
    page = get_page_number()
    limit = parse_int(request.args.get('limit'), default_limit)
    if limit < 1:
        limit = default_limit
    limit = min(limit, MAX_PAGE_LIMIT)
    return page, limit, (page - 1) * limit


def build_pagination(page, limit, total):
    """Presence-based next/prev cursors"""
    offset = (page - 1) * limit
    pagination = {}
    if offset + limit < total:
        pagination['next'] = {'page': page + 1, 'limit': limit}
    if offset > 0:
        pagination['prev'] = {'page': page - 1, 'limit': limit}
    return pagination


def total_pages(total, limit):
    if limit <= 0:
        return 1
    return max(1, (total + limit - 1) // limit)


def group_by_category(items):
    """Group records by their category, preserving query order"""
    grouped = {}
    for item in items:
        category = item['category'] if isinstance(item, dict) else item.category
        grouped.setdefault(category, []).append(item)
    return grouped


def get_category_icon(category):
    return CATEGORY_ICONS.get(category, 'code')


def get_category_description(category):
    return CATEGORY_DESCRIPTIONS.get(category, 'Technical expertise and knowledge')


def get_skill_level(proficiency):
    proficiency = proficiency or 0
    if proficiency >= 90:
        return 'expert'
    if proficiency >= 75:
        return 'advanced'
    if proficiency >= 50:
        return 'intermediate'
    return 'beginner'


def get_skill_level_text(proficiency):
    return get_skill_level(proficiency).capitalize()


def render_content(text):
    """Sanitize and normalize stored long-form text for safe rendering.

    - Removes <script> and <style> blocks
    - Preserves a small set of safe formatting tags, with attributes stripped
    - Plain text is escaped; double newlines become paragraphs, single newlines <br>
    """
    if not text:
        return Markup('')
    try:
        txt = text.replace('\r\n', '\n').replace('\r', '\n')
        txt = re.sub(r'\n\s*\n+', '\n\n', txt).strip()
        txt = re.sub(r'<(script|style).*?>.*?</\1>', '', txt, flags=re.I | re.S)

        if '<' not in txt and '>' not in txt:
            paragraphs = [p.strip() for p in re.split(r'\n\s*\n', str(escape(txt))) if p.strip()]
            return Markup(''.join(f'<p>{p.replace(chr(10), "<br>")}</p>' for p in paragraphs))

        allowed_tags = ['p', 'br', 'strong', 'em', 'ul', 'ol', 'li', 'b', 'i', 'u',
                        'code', 'pre', 'blockquote', 'h2', 'h3', 'h4']

        # Drop disallowed tags but keep their inner text
        txt = re.sub(r'</?(?!(' + '|'.join(allowed_tags) + r')\b)[^>]*>', '', txt, flags=re.I)
        # Strip every attribute from the remaining tags
        txt = re.sub(r'<(\w+)[^>]*>', lambda m: f'<{m.group(1).lower()}>', txt)

        blocks = [b.strip() for b in re.split(r'\n\s*\n', txt) if b.strip()]
        html = ''.join(b if b.lower().startswith('<') else f'<p>{b}</p>' for b in blocks)
        return Markup(html)
    except re.error as e:
        current_app.logger.error(f"Error rendering content: {str(e)}")
        return Markup(escape(text))


__all__ = [
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
    'get_category_icon',
    'get_category_description',
    'get_skill_level',
    'get_skill_level_text',
    'render_content',
]

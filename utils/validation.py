"""
Validation Module - Normalizes and validates submitted resource data

Each clean_* function accepts a form MultiDict or a JSON dict using the
public camelCase field names and returns a dict of model attributes.
HTML forms omit unchecked checkboxes, so with checkboxes=True an absent
boolean means False. With partial=True only the supplied fields are
validated and returned.
"""

import re
from datetime import datetime, date
from .helpers import slugify, split_list, parse_bool, parse_int


PROJECT_CATEGORIES = ('web', 'mobile', 'desktop', 'api', 'other')
PROJECT_STATUSES = ('planning', 'in-progress', 'completed', 'on-hold')
SKILL_CATEGORIES = ('frontend', 'backend', 'database', 'devops', 'tools', 'soft-skills', 'other')
BLOG_CATEGORIES = ('technology', 'web-development', 'programming', 'tutorials', 'career', 'personal', 'other')
BLOG_STATUSES = ('draft', 'published', 'archived')
CONTACT_STATUSES = ('new', 'read', 'replied', 'closed')
CONTACT_PRIORITIES = ('low', 'normal', 'high', 'urgent')

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
URL_RE = re.compile(r"^https?://.+")


class ValidationError(Exception):
    """Raised when submitted data fails validation"""

    def __init__(self, errors):
        self.errors = errors
        super().__init__(self.message)

    @property
    def message(self):
        return ', '.join(e['message'] for e in self.errors)

    def to_dict(self):
        return {'success': False, 'message': 'Validation failed', 'errors': self.errors}


class _Collector:
    def __init__(self, data, partial):
        self.data = data if data is not None else {}
        self.partial = partial
        self.errors = []

    def has(self, field):
        return field in self.data

    def wants(self, field):
        """Whether a field should be processed in the current mode"""
        return not self.partial or self.has(field)

    def text(self, field):
        value = self.data.get(field)
        if value is None:
            return ''
        return str(value).strip()

    def error(self, field, message):
        self.errors.append({'field': field, 'message': message})

    def length(self, field, value, min_len, max_len, message):
        if not (min_len <= len(value) <= max_len):
            self.error(field, message)

    def finish(self, attrs):
        if self.errors:
            raise ValidationError(self.errors)
        return attrs


def _parse_date(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).strip()[:10], '%Y-%m-%d').date()


def _parse_datetime(value):
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip().replace('Z', '+00:00')
    parsed = datetime.fromisoformat(text)
    # Stored as naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed


def _parse_images(value, alt_default=''):
    if isinstance(value, str):
        urls = [u.strip() for u in re.split(r'[\n,]', value) if u.strip()]
        return [{'url': u, 'alt': alt_default} for u in urls]
    images = []
    if isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, str) and item.strip():
                images.append({'url': item.strip(), 'alt': alt_default})
            elif isinstance(item, dict) and item.get('url'):
                images.append({'url': str(item['url']).strip(), 'alt': str(item.get('alt') or '')})
    return images


def clean_contact(data):
    """Public contact form submission"""
    v = _Collector(data, partial=False)
    attrs = {}

    name = v.text('name')
    v.length('name', name, 2, 50, 'Name must be between 2 and 50 characters')
    attrs['name'] = name

    email = v.text('email').lower()
    if not EMAIL_RE.match(email):
        v.error('email', 'Please provide a valid email')
    attrs['email'] = email

    subject = v.text('subject')
    v.length('subject', subject, 5, 100, 'Subject must be between 5 and 100 characters')
    attrs['subject'] = subject

    message = v.text('message')
    v.length('message', message, 10, 1000, 'Message must be between 10 and 1000 characters')
    attrs['message'] = message

    phone = v.text('phone')
    if len(phone) > 20:
        v.error('phone', 'Phone cannot be more than 20 characters')
    attrs['phone'] = phone or None

    company = v.text('company')
    if len(company) > 100:
        v.error('company', 'Company cannot be more than 100 characters')
    attrs['company'] = company or None

    return v.finish(attrs)


def clean_registration(data):
    """Self-service account creation; accounts start with the user role"""
    v = _Collector(data, partial=False)
    attrs = {}

    name = v.text('name')
    v.length('name', name, 1, 50, 'Name must be between 1 and 50 characters')
    attrs['name'] = name

    email = v.text('email').lower()
    if not EMAIL_RE.match(email):
        v.error('email', 'Please provide a valid email')
    attrs['email'] = email

    password = v.data.get('password') or ''
    if len(password) < 6:
        v.error('password', 'Password must be at least 6 characters')
    attrs['password'] = password

    return v.finish(attrs)


def clean_contact_update(data):
    """Admin triage of a contact message: status, priority, notes"""
    v = _Collector(data, partial=True)
    attrs = {}
    status = v.text('status')
    if status:
        if status not in CONTACT_STATUSES:
            v.error('status', 'Invalid status')
        attrs['status'] = status
    priority = v.text('priority')
    if priority:
        if priority not in CONTACT_PRIORITIES:
            v.error('priority', 'Invalid priority')
        attrs['priority'] = priority
    if v.has('notes'):
        attrs['notes'] = v.data.get('notes') or ''
    return v.finish(attrs)


def clean_project(data, partial=False, checkboxes=False):
    v = _Collector(data, partial)
    attrs = {}

    if v.wants('title'):
        title = v.text('title')
        v.length('title', title, 2, 100, 'Title must be between 2 and 100 characters')
        attrs['title'] = title

    if v.wants('description'):
        description = v.text('description')
        v.length('description', description, 10, 500, 'Description must be between 10 and 500 characters')
        attrs['description'] = description

    if v.has('longDescription'):
        long_description = v.text('longDescription')
        if len(long_description) > 2000:
            v.error('longDescription', 'Long description cannot exceed 2000 characters')
        attrs['long_description'] = long_description

    if v.wants('technologies'):
        technologies = split_list(v.data.get('technologies'))
        if not technologies:
            v.error('technologies', 'At least one technology is required')
        attrs['technologies'] = technologies

    if v.has('images'):
        attrs['images'] = _parse_images(v.data.get('images'), alt_default=attrs.get('title', ''))

    if v.wants('category'):
        category = v.text('category')
        if category not in PROJECT_CATEGORIES:
            v.error('category', 'Invalid category')
        attrs['category'] = category

    if v.has('status') and v.text('status'):
        status = v.text('status')
        if status not in PROJECT_STATUSES:
            v.error('status', 'Invalid status')
        attrs['status'] = status

    for field, attr in (('liveUrl', 'live_url'), ('githubUrl', 'github_url')):
        if v.has(field):
            url = v.text(field)
            if url and not URL_RE.match(url):
                v.error(field, 'Please provide a valid URL')
            attrs[attr] = url or None

    for field, attr in (('startDate', 'start_date'), ('endDate', 'end_date')):
        if v.has(field):
            try:
                attrs[attr] = _parse_date(v.data.get(field))
            except ValueError:
                v.error(field, 'Please provide a valid date (YYYY-MM-DD)')

    for field, attr in (('featured', 'featured'), ('isPublic', 'is_public')):
        if checkboxes or v.has(field):
            attrs[attr] = parse_bool(v.data.get(field))

    if v.has('order'):
        attrs['order'] = parse_int(v.data.get('order'), 0)

    return v.finish(attrs)


def clean_skill(data, partial=False, checkboxes=False):
    v = _Collector(data, partial)
    attrs = {}

    if v.wants('name'):
        name = v.text('name')
        v.length('name', name, 1, 50, 'Skill name must be between 1 and 50 characters')
        attrs['name'] = name

    if v.wants('category'):
        category = v.text('category')
        if category not in SKILL_CATEGORIES:
            v.error('category', 'Invalid category')
        attrs['category'] = category

    if v.wants('proficiency'):
        proficiency = parse_int(v.data.get('proficiency'))
        if proficiency is None or not (1 <= proficiency <= 100):
            v.error('proficiency', 'Proficiency must be between 1 and 100')
        attrs['proficiency'] = proficiency

    if v.has('yearsOfExperience') or not partial:
        years = parse_int(v.data.get('yearsOfExperience'), 0)
        if years < 0:
            v.error('yearsOfExperience', 'Years of experience cannot be negative')
        attrs['years_of_experience'] = years

    if v.has('description'):
        description = v.text('description')
        if len(description) > 300:
            v.error('description', 'Description cannot be more than 300 characters')
        attrs['description'] = description or None

    if v.has('icon'):
        attrs['icon'] = v.text('icon')
    if v.has('color'):
        attrs['color'] = v.text('color') or '#3498db'

    if v.has('order'):
        attrs['order'] = parse_int(v.data.get('order'), 0)

    if checkboxes or v.has('isVisible'):
        attrs['is_visible'] = parse_bool(v.data.get('isVisible'))

    return v.finish(attrs)


def clean_blog(data, partial=False, checkboxes=False):
    v = _Collector(data, partial)
    attrs = {}

    if v.wants('title'):
        title = v.text('title')
        v.length('title', title, 5, 200, 'Title must be between 5 and 200 characters')
        if title and not slugify(title):
            v.error('title', 'Title must contain letters or numbers')
        attrs['title'] = title

    if v.has('slug') and v.text('slug'):
        slug = slugify(v.text('slug'))
        if not slug:
            v.error('slug', 'Slug must contain letters or numbers')
        attrs['slug'] = slug

    if v.wants('excerpt'):
        excerpt = v.text('excerpt')
        v.length('excerpt', excerpt, 10, 300, 'Excerpt must be between 10 and 300 characters')
        attrs['excerpt'] = excerpt

    if v.wants('content'):
        content = v.text('content')
        if len(content) < 20:
            v.error('content', 'Content must be at least 20 characters')
        attrs['content'] = content

    if v.wants('category'):
        category = v.text('category')
        if category not in BLOG_CATEGORIES:
            v.error('category', 'Invalid category')
        attrs['category'] = category

    if v.wants('status'):
        status = v.text('status')
        attrs['status'] = status if status in BLOG_STATUSES else 'draft'

    if v.has('tags'):
        attrs['tags'] = split_list(v.data.get('tags'))
    elif not partial:
        attrs['tags'] = []

    if v.has('seoKeywords'):
        attrs['seo_keywords'] = split_list(v.data.get('seoKeywords'))

    if v.has('featuredImage'):
        attrs['featured_image'] = v.text('featuredImage') or None

    if v.has('metaDescription'):
        meta = v.text('metaDescription')
        if len(meta) > 160:
            v.error('metaDescription', 'Meta description cannot be more than 160 characters')
        attrs['meta_description'] = meta or None

    if v.has('readTime') and v.text('readTime'):
        read_time = parse_int(v.data.get('readTime'))
        if read_time is None or read_time < 1:
            v.error('readTime', 'Read time must be a positive number of minutes')
        attrs['read_time'] = read_time

    if v.has('publishedAt') and v.data.get('publishedAt'):
        try:
            attrs['published_at'] = _parse_datetime(v.data.get('publishedAt'))
        except ValueError:
            v.error('publishedAt', 'Please provide a valid date')

    if checkboxes or v.has('featured'):
        attrs['featured'] = parse_bool(v.data.get('featured'))

    return v.finish(attrs)


def clean_order_items(items, field_name):
    """Validate a reorder payload: a list of {id, order}"""
    if not isinstance(items, list) or not items:
        raise ValidationError([{'field': field_name, 'message': f'Please provide an array of {field_name}'}])
    cleaned = []
    errors = []
    for index, item in enumerate(items):
        item_id = parse_int(item.get('id')) if isinstance(item, dict) else None
        order = parse_int(item.get('order')) if isinstance(item, dict) else None
        if item_id is None or order is None:
            errors.append({'field': f'{field_name}[{index}]', 'message': 'Each item needs a numeric id and order'})
            continue
        cleaned.append((item_id, order))
    if errors:
        raise ValidationError(errors)
    return cleaned


__all__ = [
    'ValidationError',
    'clean_contact',
    'clean_registration',
    'clean_contact_update',
    'clean_project',
    'clean_skill',
    'clean_blog',
    'clean_order_items',
    'PROJECT_CATEGORIES',
    'PROJECT_STATUSES',
    'SKILL_CATEGORIES',
    'BLOG_CATEGORIES',
    'BLOG_STATUSES',
    'CONTACT_STATUSES',
    'CONTACT_PRIORITIES',
]

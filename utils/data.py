"""
Data Management Module - Model serialization and shared queries
JSON payloads use camelCase keys for the public API.
"""

from sqlalchemy import or_
from extensions import db
from models import User, Project, Skill, Blog, Contact
from .cache import content_cache, cache_key
from .helpers import group_by_category


def _iso(value):
    return value.isoformat() if value else None


def user_to_dict(user):
    """Convert user model to dictionary (never includes the password hash)"""
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'avatar': user.avatar or '',
        'isActive': bool(user.is_active),
        'createdAt': _iso(user.created_at),
    }


def author_to_dict(user):
    if not user:
        return None
    return {'id': user.id, 'name': user.name, 'email': user.email, 'avatar': user.avatar or ''}


def project_to_dict(project):
    """Convert project model to dictionary"""
    return {
        'id': project.id,
        'title': project.title,
        'description': project.description,
        'longDescription': project.long_description or '',
        'technologies': project.technology_list,
        'images': project.image_list,
        'liveUrl': project.live_url or '',
        'githubUrl': project.github_url or '',
        'category': project.category,
        'status': project.status,
        'featured': bool(project.featured),
        'startDate': _iso(project.start_date),
        'endDate': _iso(project.end_date),
        'order': project.order or 0,
        'isPublic': bool(project.is_public),
        'createdAt': _iso(project.created_at),
        'updatedAt': _iso(project.updated_at),
    }


def skill_to_dict(skill):
    """Convert skill model to dictionary"""
    return {
        'id': skill.id,
        'name': skill.name,
        'category': skill.category,
        'proficiency': skill.proficiency,
        'icon': skill.icon or '',
        'color': skill.color or '#3498db',
        'yearsOfExperience': skill.years_of_experience or 0,
        'description': skill.description or '',
        'order': skill.order or 0,
        'isVisible': bool(skill.is_visible),
        'createdAt': _iso(skill.created_at),
        'updatedAt': _iso(skill.updated_at),
    }


def blog_to_dict(blog, include_content=True):
    """Convert blog model to dictionary; list views omit the content body"""
    result = {
        'id': blog.id,
        'title': blog.title,
        'slug': blog.slug,
        'excerpt': blog.excerpt,
        'featuredImage': blog.featured_image or '',
        'author': author_to_dict(blog.author),
        'tags': blog.tag_list,
        'category': blog.category,
        'status': blog.status,
        'publishedAt': _iso(blog.published_at),
        'readTime': blog.read_time,
        'views': blog.views or 0,
        'likes': blog.likes or 0,
        'featured': bool(blog.featured),
        'metaDescription': blog.meta_description or '',
        'seoKeywords': blog.keyword_list,
        'createdAt': _iso(blog.created_at),
        'updatedAt': _iso(blog.updated_at),
    }
    if include_content:
        result['content'] = blog.content
    return result


def contact_to_dict(contact):
    """Convert contact model to dictionary"""
    return {
        'id': contact.id,
        'name': contact.name,
        'email': contact.email,
        'subject': contact.subject,
        'message': contact.message,
        'phone': contact.phone or '',
        'company': contact.company or '',
        'status': contact.status,
        'priority': contact.priority,
        'ipAddress': contact.ip_address or '',
        'userAgent': contact.user_agent or '',
        'replied': bool(contact.replied),
        'repliedAt': _iso(contact.replied_at),
        'notes': contact.notes or '',
        'createdAt': _iso(contact.created_at),
        'updatedAt': _iso(contact.updated_at),
    }


# Query helpers

def project_ordering():
    return (Project.featured.desc(), Project.order.asc(), Project.created_at.desc())


def skill_ordering():
    return (Skill.category.asc(), Skill.order.asc(), Skill.proficiency.desc())


def visible_projects(include_hidden=False):
    query = Project.query
    if not include_hidden:
        query = query.filter(Project.is_public.is_(True))
    return query


def visible_skills(include_hidden=False):
    query = Skill.query
    if not include_hidden:
        query = query.filter(Skill.is_visible.is_(True))
    return query


def published_blogs():
    return Blog.query.filter(Blog.status == 'published')


def escape_like(term):
    """Escape LIKE wildcards so user input matches literally"""
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def filter_blogs_by_tags(query, tags):
    """Keep posts carrying any of the tags, matched by their quoted form in the JSON column"""
    if isinstance(tags, str):
        tags = [tags]
    tag_column = db.cast(Blog.tags, db.String)
    return query.filter(or_(*[
        tag_column.like(f'%"{escape_like(tag)}"%', escape='\\') for tag in tags
    ]))


def search_blogs(query, term):
    pattern = f'%{escape_like(term)}%'
    return query.filter(or_(
        Blog.title.ilike(pattern, escape='\\'),
        Blog.excerpt.ilike(pattern, escape='\\'),
        Blog.content.ilike(pattern, escape='\\'),
    ))


def get_featured_projects(limit=6):
    """Public featured projects, cached"""
    key = cache_key('projects:featured', {'limit': limit})
    return content_cache.get_or_set(key, lambda: [
        project_to_dict(p) for p in visible_projects()
        .filter(Project.featured.is_(True))
        .order_by(Project.order.asc(), Project.created_at.desc())
        .limit(limit).all()
    ])


def get_public_skills(category=None):
    """Visible skills as dictionaries, cached per category"""
    params = {'category': category} if category else None
    key = cache_key('skills', params)

    def load():
        query = visible_skills()
        if category:
            query = query.filter(Skill.category == category)
        return [skill_to_dict(s) for s in query.order_by(*skill_ordering()).all()]

    return content_cache.get_or_set(key, load)


def get_grouped_skills(category=None):
    return group_by_category(get_public_skills(category))


def distinct_tags(blogs):
    tags = set()
    for blog in blogs:
        tags.update(blog.tag_list)
    return sorted(tags)


def increment_counter(blog, column):
    """Atomically add one to a blog counter (views or likes) and return the new value"""
    field = getattr(Blog, column)
    Blog.query.filter(Blog.id == blog.id).update(
        {field: field + 1}, synchronize_session=False)
    db.session.commit()
    db.session.refresh(blog)
    return getattr(blog, column)


def get_dashboard_stats():
    """Counts and recent items for the admin dashboard"""
    return {
        'projects': Project.query.count(),
        'skills': Skill.query.count(),
        'blogs': Blog.query.count(),
        'contacts': Contact.query.count(),
        'new_contacts': Contact.query.filter_by(status='new').count(),
        'recent_contacts': Contact.query.order_by(Contact.created_at.desc()).limit(5).all(),
        'recent_blogs': Blog.query.order_by(Blog.created_at.desc()).limit(5).all(),
    }


def invalidate_projects():
    content_cache.invalidate('projects:')


def invalidate_skills():
    content_cache.invalidate('skills:')


def get_user_by_email(email):
    if not email:
        return None
    return User.query.filter_by(email=email.strip().lower()).first()


__all__ = [
    'user_to_dict',
    'author_to_dict',
    'project_to_dict',
    'skill_to_dict',
    'blog_to_dict',
    'contact_to_dict',
    'project_ordering',
    'skill_ordering',
    'visible_projects',
    'visible_skills',
    'published_blogs',
    'escape_like',
    'filter_blogs_by_tags',
    'search_blogs',
    'get_featured_projects',
    'get_public_skills',
    'get_grouped_skills',
    'distinct_tags',
    'increment_counter',
    'get_dashboard_stats',
    'invalidate_projects',
    'invalidate_skills',
    'get_user_by_email',
]

"""
Seed Module - Idempotent creation of the admin account and sample content
"""

from flask import current_app
from extensions import db
from models import User, Project, Skill, Blog


SAMPLE_PROJECTS = [
    {
        'title': 'Portfolio Website',
        'description': 'A responsive portfolio website with a JSON API and an admin panel',
        'long_description': (
            'A portfolio website that showcases projects, skills and writing. '
            'Server-rendered pages, a JSON API for a separate frontend and an '
            'admin panel for managing content.'
        ),
        'technologies': ['Python', 'Flask', 'SQLAlchemy', 'MySQL', 'Bootstrap'],
        'category': 'web',
        'status': 'completed',
        'featured': True,
        'is_public': True,
        'live_url': 'https://example.com',
        'github_url': 'https://github.com/example/portfolio',
        'order': 1,
    },
    {
        'title': 'E-commerce API',
        'description': 'RESTful API for an e-commerce platform',
        'long_description': (
            'An e-commerce API with user authentication, product management, '
            'a shopping cart and payment processing.'
        ),
        'technologies': ['Python', 'Flask', 'PostgreSQL', 'Stripe'],
        'category': 'api',
        'status': 'completed',
        'featured': True,
        'is_public': True,
        'github_url': 'https://github.com/example/ecommerce-api',
        'order': 2,
    },
    {
        'title': 'Task Management App',
        'description': 'A collaborative task management application',
        'long_description': (
            'A task management application that lets teams collaborate on '
            'projects, assign tasks and track progress.'
        ),
        'technologies': ['Vue.js', 'Flask', 'PostgreSQL', 'WebSockets'],
        'category': 'web',
        'status': 'in-progress',
        'featured': False,
        'is_public': True,
        'order': 3,
    },
]

SAMPLE_SKILLS = [
    {'name': 'JavaScript', 'category': 'frontend', 'proficiency': 90, 'years_of_experience': 3,
     'icon': 'fab fa-js-square', 'color': '#f7df1e', 'order': 1,
     'description': 'Modern JavaScript, async/await and functional programming'},
    {'name': 'React', 'category': 'frontend', 'proficiency': 85, 'years_of_experience': 2,
     'icon': 'fab fa-react', 'color': '#61dafb', 'order': 2,
     'description': 'React hooks, context API and state management'},
    {'name': 'Python', 'category': 'backend', 'proficiency': 80, 'years_of_experience': 2,
     'icon': 'fab fa-python', 'color': '#3776ab', 'order': 1,
     'description': 'Backend services and APIs with Flask'},
    {'name': 'MySQL', 'category': 'database', 'proficiency': 75, 'years_of_experience': 2,
     'icon': 'fas fa-database', 'color': '#4479a1', 'order': 1,
     'description': 'Database design, optimization and queries'},
    {'name': 'Git', 'category': 'tools', 'proficiency': 85, 'years_of_experience': 3,
     'icon': 'fab fa-git-alt', 'color': '#f05032', 'order': 1,
     'description': 'Version control, branching strategies and collaboration'},
]

SAMPLE_BLOGS = [
    {
        'title': 'Getting Started with Flask Blueprints',
        'excerpt': 'How blueprints keep a growing Flask application organized by feature.',
        'content': (
            'Blueprints let a Flask application register groups of routes, templates and '
            'error handlers as one unit.\n\n'
            'Each feature gets its own package with a routes module, and the application '
            'factory registers them with a URL prefix. The public pages, the admin panel and '
            'the JSON API of this site are all separate blueprints.'
        ),
        'category': 'web-development',
        'tags': ['python', 'flask', 'backend'],
        'featured': True,
        'read_time': 5,
    },
    {
        'title': 'Caching Public API Responses',
        'excerpt': 'A small time-based cache in front of read-heavy portfolio endpoints.',
        'content': (
            'Most visitors only read content, so list endpoints can serve cached payloads.\n\n'
            'Entries expire after a few minutes and every write clears the entries for the '
            'resource it touched, so the admin panel never shows stale data for long.'
        ),
        'category': 'programming',
        'tags': ['python', 'caching', 'api'],
        'featured': False,
        'read_time': 4,
    },
]


def seed_admin_user(name=None, email=None, password=None):
    """Create the admin account unless one with the same email exists. Returns (user, created)."""
    name = name or current_app.config.get('ADMIN_NAME', 'Admin User')
    email = (email or current_app.config.get('ADMIN_EMAIL', 'admin@portfolio.com')).strip().lower()
    password = password or current_app.config.get('ADMIN_PASSWORD', 'admin123')

    existing = User.query.filter_by(email=email).first()
    if existing:
        current_app.logger.info(f"Admin user {email} already exists")
        return existing, False

    user = User(name=name, email=email, role='admin', is_active=True)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"Admin user created: {email}")
    return user, True


def seed_sample_blogs(author):
    """Insert published sample posts written by author into an empty blog table. Returns count created."""
    if Blog.query.count() > 0:
        return 0

    for item in SAMPLE_BLOGS:
        db.session.add(Blog(author_id=author.id, status='published', **item))
    db.session.commit()
    current_app.logger.info(f"Sample blog posts seeded: {len(SAMPLE_BLOGS)} by {author.email}")
    return len(SAMPLE_BLOGS)


def seed_sample_content(author=None):
    """Insert sample projects and skills into empty tables, and blog posts when an author is given.
    Returns counts created."""
    created = {'projects': 0, 'skills': 0, 'blogs': 0}

    if Project.query.count() == 0:
        for item in SAMPLE_PROJECTS:
            db.session.add(Project(**item))
        created['projects'] = len(SAMPLE_PROJECTS)

    if Skill.query.count() == 0:
        for item in SAMPLE_SKILLS:
            db.session.add(Skill(is_visible=True, **item))
        created['skills'] = len(SAMPLE_SKILLS)

    db.session.commit()
    current_app.logger.info(
        f"Sample content seeded: {created['projects']} projects, {created['skills']} skills")

    if author is not None:
        created['blogs'] = seed_sample_blogs(author)
    return created


__all__ = ['seed_admin_user', 'seed_sample_blogs', 'seed_sample_content',
           'SAMPLE_PROJECTS', 'SAMPLE_SKILLS', 'SAMPLE_BLOGS']

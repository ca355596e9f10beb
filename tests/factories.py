from datetime import datetime
from extensions import db
from models import User, Project, Skill, Blog, Contact


ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'secret123'


# Each factory runs in its own application context and returns the new id.

def make_project(app, **overrides):
    attrs = {
        'title': 'Sample Project',
        'description': 'A sample project used in tests',
        'technologies': ['Python', 'Flask'],
        'category': 'web',
        'status': 'completed',
        'featured': False,
        'is_public': True,
        'order': 0,
    }
    attrs.update(overrides)
    with app.app_context():
        project = Project(**attrs)
        db.session.add(project)
        db.session.commit()
        return project.id


def make_skill(app, **overrides):
    attrs = {
        'name': 'Python',
        'category': 'backend',
        'proficiency': 80,
        'years_of_experience': 3,
        'is_visible': True,
    }
    attrs.update(overrides)
    with app.app_context():
        skill = Skill(**attrs)
        db.session.add(skill)
        db.session.commit()
        return skill.id


def make_blog(app, **overrides):
    with app.app_context():
        author = User.query.filter_by(email=ADMIN_EMAIL).first()
        attrs = {
            'title': 'Hello World Post',
            'excerpt': 'A short excerpt for the post',
            'content': 'This is the body of the post with enough characters.',
            'category': 'programming',
            'status': 'published',
            'tags': ['python', 'flask'],
            'author_id': author.id,
        }
        attrs.update(overrides)
        post = Blog(**attrs)
        db.session.add(post)
        db.session.commit()
        return post.id


def make_contact(app, **overrides):
    attrs = {
        'name': 'Jane Visitor',
        'email': 'jane@example.com',
        'subject': 'Project inquiry',
        'message': 'I would like to talk about a project.',
        'created_at': datetime.utcnow(),
    }
    attrs.update(overrides)
    with app.app_context():
        contact = Contact(**attrs)
        db.session.add(contact)
        db.session.commit()
        return contact.id

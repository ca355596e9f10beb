from extensions import db
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON, event, inspect
from sqlalchemy.orm import validates
from werkzeug.security import generate_password_hash, check_password_hash
from utils.helpers import slugify, parse_json_list


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text elsewhere
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default='user')  # admin, user
    avatar = db.Column(db.String(500), default='')
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    blogs = db.relationship('Blog', backref='author', lazy=True)

    @validates('email')
    def _lower_email(self, key, value):
        return value.strip().lower() if value else value

    def set_password(self, raw_password):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        if not self.password or raw_password is None:
            return False
        return check_password_hash(self.password, raw_password)

    @property
    def is_admin(self):
        return self.role == 'admin'

    def session_payload(self):
        """Minimal identity stored in the Flask session"""
        return {'id': self.id, 'name': self.name, 'email': self.email, 'role': self.role}


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), nullable=False)
    long_description = db.Column(db.Text)
    technologies = db.Column(SafeJSON, default=list)
    images = db.Column(SafeJSON, default=list)  # [{url, alt}]
    live_url = db.Column(db.String(500))
    github_url = db.Column(db.String(500))
    category = db.Column(db.String(20), nullable=False)  # web, mobile, desktop, api, other
    status = db.Column(db.String(20), default='planning')  # planning, in-progress, completed, on-hold
    featured = db.Column(db.Boolean, default=False)
    start_date = db.Column(db.Date)
    end_date = db.Column(db.Date)
    order = db.Column(db.Integer, default=0)
    is_public = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_project_category_featured_order', 'category', 'featured', 'order'),
    )

    @property
    def technology_list(self):
        return [t for t in parse_json_list(self.technologies) if isinstance(t, str)]

    @property
    def image_list(self):
        images = []
        for image in parse_json_list(self.images):
            if isinstance(image, dict) and image.get('url'):
                images.append({'url': image['url'], 'alt': image.get('alt') or ''})
        return images


class Skill(db.Model):
    __tablename__ = 'skills'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    category = db.Column(db.String(20), nullable=False)
    proficiency = db.Column(db.Integer, nullable=False)
    icon = db.Column(db.String(255), default='')  # URL or icon class name
    color = db.Column(db.String(20), default='#3498db')
    years_of_experience = db.Column(db.Integer, default=0)
    description = db.Column(db.String(300))
    order = db.Column(db.Integer, default=0)
    is_visible = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_skill_category_order', 'category', 'order'),
    )


class Blog(db.Model):
    __tablename__ = 'blogs'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    excerpt = db.Column(db.String(300), nullable=False)
    content = db.Column(db.Text, nullable=False)
    featured_image = db.Column(db.String(500))
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    tags = db.Column(SafeJSON, default=list)
    category = db.Column(db.String(30), nullable=False)
    status = db.Column(db.String(20), default='draft')  # draft, published, archived
    published_at = db.Column(db.DateTime)
    read_time = db.Column(db.Integer, default=5)  # minutes
    views = db.Column(db.Integer, default=0)
    likes = db.Column(db.Integer, default=0)
    featured = db.Column(db.Boolean, default=False)
    meta_description = db.Column(db.String(160))
    seo_keywords = db.Column(SafeJSON, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_blog_status_published', 'status', 'published_at'),
    )

    @property
    def tag_list(self):
        return [t for t in parse_json_list(self.tags) if isinstance(t, str)]

    @property
    def keyword_list(self):
        return [k for k in parse_json_list(self.seo_keywords) if isinstance(k, str)]


class Contact(db.Model):
    __tablename__ = 'contacts'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(100), nullable=False)
    subject = db.Column(db.String(100), nullable=False)
    message = db.Column(db.Text, nullable=False)
    phone = db.Column(db.String(20))
    company = db.Column(db.String(100))
    status = db.Column(db.String(20), default='new')  # new, read, replied, closed
    priority = db.Column(db.String(20), default='normal')  # low, normal, high, urgent
    ip_address = db.Column(db.String(45))
    user_agent = db.Column(db.Text)
    replied = db.Column(db.Boolean, default=False)
    replied_at = db.Column(db.DateTime)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_contact_status_priority_created', 'status', 'priority', 'created_at'),
    )

    @validates('email')
    def _lower_email(self, key, value):
        return value.strip().lower() if value else value

    def mark_read(self):
        """Move a new message to read. Returns True when the status changed."""
        if self.status == 'new':
            self.status = 'read'
            return True
        return False

    def apply_triage(self, status=None, priority=None, notes=None):
        if status:
            self.status = status
        if priority:
            self.priority = priority
        if notes is not None:
            self.notes = notes
        if status == 'replied' and not self.replied:
            self.replied = True
            self.replied_at = datetime.utcnow()


@event.listens_for(Blog, 'before_insert')
def blog_before_insert(mapper, connection, target):
    if not target.slug:
        target.slug = slugify(target.title or '')
    if target.status == 'published' and target.published_at is None:
        target.published_at = datetime.utcnow()


@event.listens_for(Blog, 'before_update')
def blog_before_update(mapper, connection, target):
    state = inspect(target)
    title_changed = state.attrs.title.history.has_changes()
    slug_changed = state.attrs.slug.history.has_changes()
    if not target.slug or (title_changed and not slug_changed):
        target.slug = slugify(target.title or '')
    # An existing publication date is never overwritten
    if target.status == 'published' and target.published_at is None:
        target.published_at = datetime.utcnow()

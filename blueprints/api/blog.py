"""
API Blog - Blog posts, tags and likes
"""

from flask import request
from flask_login import current_user
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import Blog
from utils.data import (
    blog_to_dict,
    published_blogs,
    filter_blogs_by_tags,
    search_blogs,
    distinct_tags,
    increment_counter
)
from utils.decorators import is_admin_user, api_admin_required
from utils.helpers import get_pagination_args, build_pagination, parse_bool, split_list
from utils.validation import clean_blog
from . import api_bp
from .common import json_body, success, failure, not_found, server_error


DUPLICATE_SLUG = 'Blog post with this slug already exists'


@api_bp.route('/blog')
def list_blogs():
    """Paginated posts without their content; drafts only for admins"""
    admin = is_admin_user()
    page, limit, offset = get_pagination_args(default_limit=10)

    query = Blog.query if admin else published_blogs()
    if request.args.get('category'):
        query = query.filter(Blog.category == request.args['category'])
    if admin and request.args.get('status'):
        query = query.filter(Blog.status == request.args['status'])
    if request.args.get('featured') is not None:
        query = query.filter(Blog.featured.is_(parse_bool(request.args['featured'])))
    tags = split_list(request.args.get('tags'))
    if tags:
        query = filter_blogs_by_tags(query, tags)
    if request.args.get('search'):
        query = search_blogs(query, request.args['search'].strip())

    try:
        total = query.count()
        posts = (query.order_by(Blog.featured.desc(), Blog.published_at.desc(), Blog.created_at.desc())
                 .offset(offset).limit(limit).all())
    except Exception as e:
        return server_error('Get blog posts', e)

    return success(
        [blog_to_dict(p, include_content=False) for p in posts],
        count=len(posts),
        total=total,
        pagination=build_pagination(page, limit, total),
    )


@api_bp.route('/blog/featured')
def featured_blogs():
    try:
        posts = (published_blogs()
                 .filter(Blog.featured.is_(True))
                 .order_by(Blog.published_at.desc())
                 .limit(3).all())
    except Exception as e:
        return server_error('Get featured blog posts', e)
    return success([blog_to_dict(p, include_content=False) for p in posts], count=len(posts))


@api_bp.route('/blog/tags')
def blog_tags():
    """Sorted distinct tags of published posts"""
    try:
        return success(distinct_tags(published_blogs().all()))
    except Exception as e:
        return server_error('Get blog tags', e)


@api_bp.route('/blog/<slug>')
def get_blog(slug):
    """Single post by slug; each read counts as a view"""
    query = Blog.query if is_admin_user() else published_blogs()
    post = query.filter(Blog.slug == slug).first()
    if not post:
        return not_found('Blog post')
    try:
        increment_counter(post, 'views')
    except Exception as e:
        return server_error('Get blog post', e)
    return success(blog_to_dict(post))


@api_bp.route('/blog', methods=['POST'])
@api_admin_required
def create_blog():
    attrs = clean_blog(json_body())
    try:
        post = Blog(author_id=current_user.id, **attrs)
        db.session.add(post)
        db.session.commit()
        return success(blog_to_dict(post), status=201)
    except IntegrityError:
        db.session.rollback()
        return failure(DUPLICATE_SLUG, 400)
    except Exception as e:
        return server_error('Create blog post', e)


@api_bp.route('/blog/<int:blog_id>', methods=['PUT'])
@api_admin_required
def update_blog(blog_id):
    post = db.session.get(Blog, blog_id)
    if not post:
        return not_found('Blog post')
    attrs = clean_blog(json_body(), partial=True)
    try:
        for key, value in attrs.items():
            setattr(post, key, value)
        db.session.commit()
        return success(blog_to_dict(post))
    except IntegrityError:
        db.session.rollback()
        return failure(DUPLICATE_SLUG, 400)
    except Exception as e:
        return server_error('Update blog post', e)


@api_bp.route('/blog/<int:blog_id>', methods=['DELETE'])
@api_admin_required
def delete_blog(blog_id):
    post = db.session.get(Blog, blog_id)
    if not post:
        return not_found('Blog post')
    try:
        db.session.delete(post)
        db.session.commit()
        return success(message='Blog post deleted successfully')
    except Exception as e:
        return server_error('Delete blog post', e)


@api_bp.route('/blog/<int:blog_id>/like', methods=['POST'])
def like_blog(blog_id):
    post = db.session.get(Blog, blog_id)
    if not post:
        return not_found('Blog post')
    if post.status != 'published':
        return failure('Cannot like unpublished blog post', 400)
    try:
        likes = increment_counter(post, 'likes')
    except Exception as e:
        return server_error('Like blog post', e)
    return success(message='Blog post liked successfully', likes=likes)

"""
API Projects - Project listing and management
"""

from flask import request
from extensions import db
from models import Project
from utils.cache import content_cache, cache_key
from utils.data import (
    project_to_dict,
    project_ordering,
    visible_projects,
    get_featured_projects,
    invalidate_projects
)
from utils.decorators import is_admin_user, api_admin_required
from utils.helpers import get_pagination_args, build_pagination, parse_bool
from utils.validation import clean_project, clean_order_items
from . import api_bp
from .common import json_body, success, not_found, server_error


def _list_filters():
    """Recognized list filters, normalized so equivalent queries share a cache key"""
    page, limit, offset = get_pagination_args(default_limit=10)
    filters = {'page': page, 'limit': limit}
    for name in ('category', 'status'):
        value = request.args.get(name)
        if value:
            filters[name] = value
    featured = request.args.get('featured')
    if featured is not None:
        filters['featured'] = parse_bool(featured)
    return filters, offset


def _list_payload(admin, filters, offset):
    page, limit = filters['page'], filters['limit']

    query = visible_projects(include_hidden=admin)
    if 'category' in filters:
        query = query.filter(Project.category == filters['category'])
    if 'status' in filters:
        query = query.filter(Project.status == filters['status'])
    if 'featured' in filters:
        query = query.filter(Project.featured.is_(filters['featured']))

    total = query.count()
    items = query.order_by(*project_ordering()).offset(offset).limit(limit).all()
    return {
        'success': True,
        'count': len(items),
        'total': total,
        'pagination': build_pagination(page, limit, total),
        'data': [project_to_dict(p) for p in items],
    }


@api_bp.route('/projects')
def list_projects():
    """Paginated projects; private ones only for admins"""
    try:
        filters, offset = _list_filters()
        if is_admin_user():
            return _list_payload(True, filters, offset)
        key = cache_key('projects:list', filters)
        return content_cache.get_or_set(key, lambda: _list_payload(False, filters, offset))
    except Exception as e:
        return server_error('Get projects', e)


@api_bp.route('/projects/featured')
def featured_projects():
    try:
        projects = get_featured_projects(limit=6)
        return success(projects, count=len(projects))
    except Exception as e:
        return server_error('Get featured projects', e)


@api_bp.route('/projects/<int:project_id>')
def get_project(project_id):
    project = visible_projects(include_hidden=is_admin_user()).filter(Project.id == project_id).first()
    if not project:
        return not_found('Project')
    return success(project_to_dict(project))


@api_bp.route('/projects', methods=['POST'])
@api_admin_required
def create_project():
    attrs = clean_project(json_body())
    try:
        project = Project(**attrs)
        db.session.add(project)
        db.session.commit()
        invalidate_projects()
        return success(project_to_dict(project), status=201)
    except Exception as e:
        return server_error('Create project', e)


@api_bp.route('/projects/<int:project_id>', methods=['PUT'])
@api_admin_required
def update_project(project_id):
    project = db.session.get(Project, project_id)
    if not project:
        return not_found('Project')
    attrs = clean_project(json_body(), partial=True)
    try:
        for key, value in attrs.items():
            setattr(project, key, value)
        db.session.commit()
        invalidate_projects()
        return success(project_to_dict(project))
    except Exception as e:
        return server_error('Update project', e)


@api_bp.route('/projects/<int:project_id>', methods=['DELETE'])
@api_admin_required
def delete_project(project_id):
    project = db.session.get(Project, project_id)
    if not project:
        return not_found('Project')
    try:
        db.session.delete(project)
        db.session.commit()
        invalidate_projects()
        return success(message='Project deleted successfully')
    except Exception as e:
        return server_error('Delete project', e)


@api_bp.route('/projects/reorder', methods=['PUT'])
@api_admin_required
def reorder_projects():
    """Set display order from a list of {id, order}"""
    items = clean_order_items(json_body().get('projects'), 'projects')
    try:
        for project_id, order in items:
            Project.query.filter(Project.id == project_id).update(
                {Project.order: order}, synchronize_session=False)
        db.session.commit()
        invalidate_projects()
        return success(message='Projects reordered successfully')
    except Exception as e:
        return server_error('Reorder projects', e)

"""
API Skills - Skill listing and management
"""

from flask import request
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import Skill
from utils.data import (
    skill_to_dict,
    skill_ordering,
    visible_skills,
    get_public_skills,
    invalidate_skills
)
from utils.decorators import is_admin_user, api_admin_required
from utils.helpers import group_by_category, parse_bool
from utils.validation import ValidationError, clean_skill, clean_order_items
from . import api_bp
from .common import json_body, success, failure, not_found, server_error


DUPLICATE_SKILL = 'Skill with this name already exists'


@api_bp.route('/skills')
def list_skills():
    """Skills ordered by category, order and proficiency, plus a grouped view"""
    category = request.args.get('category')
    try:
        if is_admin_user():
            query = Skill.query
            if category:
                query = query.filter(Skill.category == category)
            if request.args.get('visible') is not None:
                query = query.filter(Skill.is_visible.is_(parse_bool(request.args.get('visible'))))
            skills = [skill_to_dict(s) for s in query.order_by(*skill_ordering()).all()]
        else:
            skills = get_public_skills(category)
        return success(skills, count=len(skills), grouped=group_by_category(skills))
    except Exception as e:
        return server_error('Get skills', e)


@api_bp.route('/skills/categories')
def skill_categories():
    """Visible skills grouped by category"""
    try:
        return success(group_by_category(get_public_skills()))
    except Exception as e:
        return server_error('Get skill categories', e)


@api_bp.route('/skills/<int:skill_id>')
def get_skill(skill_id):
    skill = visible_skills(include_hidden=is_admin_user()).filter(Skill.id == skill_id).first()
    if not skill:
        return not_found('Skill')
    return success(skill_to_dict(skill))


@api_bp.route('/skills', methods=['POST'])
@api_admin_required
def create_skill():
    attrs = clean_skill(json_body())
    try:
        skill = Skill(**attrs)
        db.session.add(skill)
        db.session.commit()
        invalidate_skills()
        return success(skill_to_dict(skill), status=201)
    except IntegrityError:
        db.session.rollback()
        return failure(DUPLICATE_SKILL, 400)
    except Exception as e:
        return server_error('Create skill', e)


@api_bp.route('/skills/<int:skill_id>', methods=['PUT'])
@api_admin_required
def update_skill(skill_id):
    skill = db.session.get(Skill, skill_id)
    if not skill:
        return not_found('Skill')
    attrs = clean_skill(json_body(), partial=True)
    try:
        for key, value in attrs.items():
            setattr(skill, key, value)
        db.session.commit()
        invalidate_skills()
        return success(skill_to_dict(skill))
    except IntegrityError:
        db.session.rollback()
        return failure(DUPLICATE_SKILL, 400)
    except Exception as e:
        return server_error('Update skill', e)


@api_bp.route('/skills/<int:skill_id>', methods=['DELETE'])
@api_admin_required
def delete_skill(skill_id):
    skill = db.session.get(Skill, skill_id)
    if not skill:
        return not_found('Skill')
    try:
        db.session.delete(skill)
        db.session.commit()
        invalidate_skills()
        return success(message='Skill deleted successfully')
    except Exception as e:
        return server_error('Delete skill', e)


@api_bp.route('/skills/reorder', methods=['PUT'])
@api_admin_required
def reorder_skills():
    items = clean_order_items(json_body().get('skills'), 'skills')
    try:
        for skill_id, order in items:
            Skill.query.filter(Skill.id == skill_id).update(
                {Skill.order: order}, synchronize_session=False)
        db.session.commit()
        invalidate_skills()
        return success(message='Skills reordered successfully')
    except Exception as e:
        return server_error('Reorder skills', e)


@api_bp.route('/skills/bulk', methods=['POST'])
@api_admin_required
def bulk_create_skills():
    """Create several skills at once; the whole batch is rejected on any error"""
    items = json_body().get('skills')
    if not isinstance(items, list) or not items:
        return failure('Please provide an array of skills', 400)

    cleaned = []
    errors = []
    seen = set()
    for index, item in enumerate(items):
        try:
            attrs = clean_skill(item if isinstance(item, dict) else {})
        except ValidationError as e:
            errors.extend({'field': f"skills[{index}].{err['field']}", 'message': err['message']}
                          for err in e.errors)
            continue
        name_key = attrs['name'].lower()
        if name_key in seen:
            errors.append({'field': f'skills[{index}].name', 'message': 'Duplicate skill name in request'})
            continue
        seen.add(name_key)
        cleaned.append(attrs)
    if errors:
        raise ValidationError(errors)

    try:
        skills = [Skill(**attrs) for attrs in cleaned]
        db.session.add_all(skills)
        db.session.commit()
        invalidate_skills()
        data = [skill_to_dict(s) for s in skills]
        return success(data, status=201, count=len(data))
    except IntegrityError:
        db.session.rollback()
        return failure(DUPLICATE_SKILL, 400)
    except Exception as e:
        return server_error('Bulk create skills', e)

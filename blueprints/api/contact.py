"""
API Contact - Public submissions and admin triage
"""

from flask import request, current_app
from extensions import db
from models import Contact
from utils.data import contact_to_dict
from utils.decorators import api_admin_required
from utils.helpers import get_pagination_args, build_pagination
from utils.notifications import notify_new_contact
from utils.security import get_client_ip, get_user_agent
from utils.validation import clean_contact, clean_contact_update
from . import api_bp
from .common import json_body, success, failure, not_found, server_error


@api_bp.route('/contact', methods=['POST'])
def submit_contact():
    """Store a contact message and notify the owner"""
    attrs = clean_contact(json_body())
    try:
        message = Contact(ip_address=get_client_ip(), user_agent=get_user_agent(), **attrs)
        db.session.add(message)
        db.session.commit()
    except Exception as e:
        current_app.logger.error(f"Contact form error: {str(e)}")
        db.session.rollback()
        return failure('There was an error sending your message. Please try again later.', 500)

    notify_new_contact(message)

    return success(
        {
            'id': message.id,
            'name': message.name,
            'email': message.email,
            'subject': message.subject,
            'createdAt': message.created_at.isoformat() if message.created_at else None,
        },
        status=201,
        message='Your message has been sent successfully! I will get back to you soon.',
    )


@api_bp.route('/contact')
@api_admin_required
def list_contacts():
    page, limit, offset = get_pagination_args(default_limit=10)
    query = Contact.query
    if request.args.get('status'):
        query = query.filter(Contact.status == request.args['status'])
    if request.args.get('priority'):
        query = query.filter(Contact.priority == request.args['priority'])

    try:
        total = query.count()
        messages = query.order_by(Contact.created_at.desc()).offset(offset).limit(limit).all()
    except Exception as e:
        return server_error('Get contacts', e)

    return success(
        [contact_to_dict(c) for c in messages],
        count=len(messages),
        total=total,
        pagination=build_pagination(page, limit, total),
    )


@api_bp.route('/contact/<int:contact_id>')
@api_admin_required
def get_contact(contact_id):
    """Reading a new message marks it as read"""
    message = db.session.get(Contact, contact_id)
    if not message:
        return not_found('Contact')
    try:
        if message.mark_read():
            db.session.commit()
    except Exception as e:
        return server_error('Get contact', e)
    return success(contact_to_dict(message))


@api_bp.route('/contact/<int:contact_id>', methods=['PUT'])
@api_admin_required
def update_contact(contact_id):
    message = db.session.get(Contact, contact_id)
    if not message:
        return not_found('Contact')
    attrs = clean_contact_update(json_body())
    try:
        message.apply_triage(**attrs)
        db.session.commit()
    except Exception as e:
        return server_error('Update contact', e)
    return success(contact_to_dict(message))


@api_bp.route('/contact/<int:contact_id>', methods=['DELETE'])
@api_admin_required
def delete_contact(contact_id):
    message = db.session.get(Contact, contact_id)
    if not message:
        return not_found('Contact')
    try:
        db.session.delete(message)
        db.session.commit()
    except Exception as e:
        return server_error('Delete contact', e)
    return success(message='Contact deleted successfully')

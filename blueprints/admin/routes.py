"""
Admin Routes - Content management for projects, skills, blog posts and contacts
"""

import re
from flask import render_template, session, redirect, url_for, request, flash, jsonify, current_app
from flask_login import current_user
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import User, Project, Skill, Blog, Contact
from utils.decorators import admin_required
from utils.data import (
    get_dashboard_stats,
    get_user_by_email,
    invalidate_projects,
    invalidate_skills,
    project_ordering,
    skill_ordering
)
from utils.helpers import group_by_category, get_page_number, parse_int, total_pages
from utils.security import validate_password_change
from utils.validation import (
    ValidationError,
    clean_project,
    clean_skill,
    clean_blog,
    clean_contact_update,
    EMAIL_RE,
    URL_RE,
    PROJECT_CATEGORIES,
    PROJECT_STATUSES,
    SKILL_CATEGORIES,
    BLOG_CATEGORIES,
    BLOG_STATUSES,
    CONTACT_STATUSES,
    CONTACT_PRIORITIES
)
from . import admin_bp


PROJECTS_PER_PAGE = 10
POSTS_PER_PAGE = 10
CONTACTS_PER_PAGE = 20


def _flash_errors(error):
    flash(error.message, 'error')


def _apply(obj, attrs):
    for key, value in attrs.items():
        setattr(obj, key, value)


# ==================== DASHBOARD ====================

@admin_bp.route('/')
@admin_required
def dashboard():
    """Admin dashboard with content counts and recent activity"""
    try:
        stats = get_dashboard_stats()
    except Exception as e:
        current_app.logger.error(f"Dashboard error: {str(e)}")
        flash('Error loading dashboard', 'error')
        stats = {'projects': 0, 'skills': 0, 'blogs': 0, 'contacts': 0,
                 'new_contacts': 0, 'recent_contacts': [], 'recent_blogs': []}
    return render_template('admin/dashboard.html', title='Admin Dashboard', stats=stats)


# ==================== PROJECTS ====================

@admin_bp.route('/projects')
@admin_required
def projects():
    """All projects, including private ones"""
    page = get_page_number()
    query = Project.query
    total = query.count()
    project_list = (query.order_by(*project_ordering())
                    .offset((page - 1) * PROJECTS_PER_PAGE)
                    .limit(PROJECTS_PER_PAGE).all())
    return render_template('admin/projects/index.html',
                           title='Manage Projects',
                           projects=project_list,
                           current_page=page,
                           total_pages=total_pages(total, PROJECTS_PER_PAGE),
                           total=total)


@admin_bp.route('/projects/add', methods=['GET', 'POST'])
@admin_required
def add_project():
    """Add new project"""
    if request.method == 'POST':
        try:
            attrs = clean_project(request.form, checkboxes=True)
        except ValidationError as e:
            _flash_errors(e)
            return redirect(url_for('admin.add_project'))

        try:
            project = Project(**attrs)
            db.session.add(project)
            db.session.commit()
            invalidate_projects()
            current_app.logger.info(f"Project created: {project.id}")
            flash('Project created successfully!', 'success')
            return redirect(url_for('admin.projects'))
        except Exception as e:
            current_app.logger.error(f"Create project error: {str(e)}")
            db.session.rollback()
            flash('Error creating project', 'error')
            return redirect(url_for('admin.add_project'))

    return render_template('admin/projects/form.html', title='Add Project', project=None,
                           categories=PROJECT_CATEGORIES, statuses=PROJECT_STATUSES)


@admin_bp.route('/projects/view/<int:project_id>')
@admin_required
def view_project(project_id):
    project = db.session.get(Project, project_id)
    if not project:
        flash('Project not found', 'error')
        return redirect(url_for('admin.projects'))
    return render_template('admin/projects/view.html', title=project.title, project=project)


@admin_bp.route('/projects/edit/<int:project_id>', methods=['GET', 'POST'])
@admin_required
def edit_project(project_id):
    """Edit existing project"""
    project = db.session.get(Project, project_id)
    if not project:
        flash('Project not found', 'error')
        return redirect(url_for('admin.projects'))

    if request.method == 'POST':
        try:
            attrs = clean_project(request.form, checkboxes=True)
        except ValidationError as e:
            _flash_errors(e)
            return redirect(url_for('admin.edit_project', project_id=project_id))

        try:
            _apply(project, attrs)
            db.session.commit()
            invalidate_projects()
            flash('Project updated successfully!', 'success')
            return redirect(url_for('admin.projects'))
        except Exception as e:
            current_app.logger.error(f"Update project error: {str(e)}")
            db.session.rollback()
            flash('Error updating project', 'error')
            return redirect(url_for('admin.edit_project', project_id=project_id))

    return render_template('admin/projects/form.html', title='Edit Project', project=project,
                           categories=PROJECT_CATEGORIES, statuses=PROJECT_STATUSES)


@admin_bp.route('/projects/delete/<int:project_id>', methods=['POST'])
@admin_required
def delete_project(project_id):
    """Delete project"""
    project = db.session.get(Project, project_id)
    if not project:
        flash('Project not found', 'error')
        return redirect(url_for('admin.projects'))
    try:
        db.session.delete(project)
        db.session.commit()
        invalidate_projects()
        flash('Project deleted successfully!', 'success')
    except Exception as e:
        current_app.logger.error(f"Delete project error: {str(e)}")
        db.session.rollback()
        flash('Error deleting project', 'error')
    return redirect(url_for('admin.projects'))


@admin_bp.route('/projects/<int:project_id>/toggle-featured', methods=['POST'])
@admin_required
def toggle_project_featured(project_id):
    project = db.session.get(Project, project_id)
    if not project:
        return jsonify({'success': False, 'message': 'Project not found'}), 404
    try:
        project.featured = not project.featured
        db.session.commit()
        invalidate_projects()
    except Exception as e:
        current_app.logger.error(f"Toggle featured error: {str(e)}")
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Error updating project'}), 500
    state = 'marked as' if project.featured else 'removed from'
    return jsonify({'success': True, 'message': f'Project {state} featured', 'featured': project.featured})


@admin_bp.route('/projects/<int:project_id>/toggle-visibility', methods=['POST'])
@admin_required
def toggle_project_visibility(project_id):
    project = db.session.get(Project, project_id)
    if not project:
        return jsonify({'success': False, 'message': 'Project not found'}), 404
    try:
        project.is_public = not project.is_public
        db.session.commit()
        invalidate_projects()
    except Exception as e:
        current_app.logger.error(f"Toggle visibility error: {str(e)}")
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Error updating project'}), 500
    state = 'public' if project.is_public else 'private'
    return jsonify({'success': True, 'message': f'Project made {state}', 'isPublic': project.is_public})


# ==================== SKILLS ====================

@admin_bp.route('/skills')
@admin_required
def skills():
    """All skills grouped by category"""
    skill_list = Skill.query.order_by(*skill_ordering()).all()
    return render_template('admin/skills/index.html',
                           title='Manage Skills',
                           grouped_skills=group_by_category(skill_list),
                           total=len(skill_list))


@admin_bp.route('/skills/add', methods=['GET', 'POST'])
@admin_required
def add_skill():
    if request.method == 'POST':
        try:
            attrs = clean_skill(request.form, checkboxes=True)
        except ValidationError as e:
            _flash_errors(e)
            return redirect(url_for('admin.add_skill'))

        try:
            db.session.add(Skill(**attrs))
            db.session.commit()
            invalidate_skills()
            flash('Skill created successfully!', 'success')
            return redirect(url_for('admin.skills'))
        except IntegrityError:
            db.session.rollback()
            flash('Skill with this name already exists', 'error')
        except Exception as e:
            current_app.logger.error(f"Create skill error: {str(e)}")
            db.session.rollback()
            flash('Error creating skill', 'error')
        return redirect(url_for('admin.add_skill'))

    return render_template('admin/skills/form.html', title='Add Skill', skill=None,
                           categories=SKILL_CATEGORIES)


@admin_bp.route('/skills/edit/<int:skill_id>', methods=['GET', 'POST'])
@admin_required
def edit_skill(skill_id):
    skill = db.session.get(Skill, skill_id)
    if not skill:
        flash('Skill not found', 'error')
        return redirect(url_for('admin.skills'))

    if request.method == 'POST':
        try:
            attrs = clean_skill(request.form, checkboxes=True)
        except ValidationError as e:
            _flash_errors(e)
            return redirect(url_for('admin.edit_skill', skill_id=skill_id))

        try:
            _apply(skill, attrs)
            db.session.commit()
            invalidate_skills()
            flash('Skill updated successfully!', 'success')
            return redirect(url_for('admin.skills'))
        except IntegrityError:
            db.session.rollback()
            flash('Skill with this name already exists', 'error')
        except Exception as e:
            current_app.logger.error(f"Update skill error: {str(e)}")
            db.session.rollback()
            flash('Error updating skill', 'error')
        return redirect(url_for('admin.edit_skill', skill_id=skill_id))

    return render_template('admin/skills/form.html', title='Edit Skill', skill=skill,
                           categories=SKILL_CATEGORIES)


@admin_bp.route('/skills/delete/<int:skill_id>', methods=['POST'])
@admin_required
def delete_skill(skill_id):
    skill = db.session.get(Skill, skill_id)
    if not skill:
        flash('Skill not found', 'error')
        return redirect(url_for('admin.skills'))
    try:
        db.session.delete(skill)
        db.session.commit()
        invalidate_skills()
        flash('Skill deleted successfully!', 'success')
    except Exception as e:
        current_app.logger.error(f"Delete skill error: {str(e)}")
        db.session.rollback()
        flash('Error deleting skill', 'error')
    return redirect(url_for('admin.skills'))


@admin_bp.route('/skills/<int:skill_id>/update-proficiency', methods=['POST'])
@admin_required
def update_skill_proficiency(skill_id):
    """Inline proficiency slider"""
    skill = db.session.get(Skill, skill_id)
    if not skill:
        return jsonify({'success': False, 'message': 'Skill not found'}), 404

    payload = request.get_json(silent=True) or request.form
    proficiency = parse_int(payload.get('proficiency'))
    if proficiency is None or not (1 <= proficiency <= 100):
        return jsonify({'success': False, 'message': 'Proficiency must be between 1 and 100'}), 400

    try:
        skill.proficiency = proficiency
        db.session.commit()
        invalidate_skills()
    except Exception as e:
        current_app.logger.error(f"Update proficiency error: {str(e)}")
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Error updating proficiency'}), 500
    return jsonify({'success': True, 'message': 'Proficiency updated successfully',
                    'proficiency': skill.proficiency})


@admin_bp.route('/skills/<int:skill_id>/toggle-visibility', methods=['POST'])
@admin_required
def toggle_skill_visibility(skill_id):
    skill = db.session.get(Skill, skill_id)
    if not skill:
        return jsonify({'success': False, 'message': 'Skill not found'}), 404
    try:
        skill.is_visible = not skill.is_visible
        db.session.commit()
        invalidate_skills()
    except Exception as e:
        current_app.logger.error(f"Toggle skill visibility error: {str(e)}")
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Error toggling visibility'}), 500
    state = 'shown' if skill.is_visible else 'hidden'
    return jsonify({'success': True, 'message': f'Skill {state} successfully',
                    'isVisible': skill.is_visible})


# ==================== BLOG ====================

@admin_bp.route('/blog')
@admin_required
def blog():
    page = get_page_number()
    total = Blog.query.count()
    posts = (Blog.query.order_by(Blog.created_at.desc())
             .offset((page - 1) * POSTS_PER_PAGE)
             .limit(POSTS_PER_PAGE).all())
    return render_template('admin/blog/index.html',
                           title='Manage Blog',
                           blogs=posts,
                           current_page=page,
                           total_pages=total_pages(total, POSTS_PER_PAGE),
                           total=total)


@admin_bp.route('/blog/add', methods=['GET', 'POST'])
@admin_required
def add_blog():
    """New post authored by the signed-in admin"""
    if request.method == 'POST':
        try:
            attrs = clean_blog(request.form, checkboxes=True)
        except ValidationError as e:
            _flash_errors(e)
            return redirect(url_for('admin.add_blog'))

        try:
            post = Blog(author_id=current_user.id, **attrs)
            db.session.add(post)
            db.session.commit()
            current_app.logger.info(f"Blog post created: {post.slug}")
            if post.status == 'published':
                flash('Blog post published successfully!', 'success')
            else:
                flash('Blog post saved as draft!', 'success')
            return redirect(url_for('admin.blog'))
        except IntegrityError:
            db.session.rollback()
            flash('Blog post with this slug already exists', 'error')
        except Exception as e:
            current_app.logger.error(f"Create blog error: {str(e)}")
            db.session.rollback()
            flash('Error creating blog post', 'error')
        return redirect(url_for('admin.add_blog'))

    return render_template('admin/blog/form.html', title='New Blog Post', blog=None,
                           categories=BLOG_CATEGORIES, statuses=BLOG_STATUSES)


@admin_bp.route('/blog/edit/<int:blog_id>', methods=['GET', 'POST'])
@admin_required
def edit_blog(blog_id):
    post = db.session.get(Blog, blog_id)
    if not post:
        flash('Blog post not found', 'error')
        return redirect(url_for('admin.blog'))

    if request.method == 'POST':
        try:
            attrs = clean_blog(request.form, checkboxes=True)
        except ValidationError as e:
            _flash_errors(e)
            return redirect(url_for('admin.edit_blog', blog_id=blog_id))

        try:
            _apply(post, attrs)
            db.session.commit()
            flash('Blog post updated successfully!', 'success')
            return redirect(url_for('admin.blog'))
        except IntegrityError:
            db.session.rollback()
            flash('Blog post with this slug already exists', 'error')
        except Exception as e:
            current_app.logger.error(f"Update blog error: {str(e)}")
            db.session.rollback()
            flash('Error updating blog post', 'error')
        return redirect(url_for('admin.edit_blog', blog_id=blog_id))

    return render_template('admin/blog/form.html', title='Edit Blog Post', blog=post,
                           categories=BLOG_CATEGORIES, statuses=BLOG_STATUSES)


@admin_bp.route('/blog/delete/<int:blog_id>', methods=['POST'])
@admin_required
def delete_blog(blog_id):
    post = db.session.get(Blog, blog_id)
    if not post:
        flash('Blog post not found', 'error')
        return redirect(url_for('admin.blog'))
    try:
        db.session.delete(post)
        db.session.commit()
        flash('Blog post deleted successfully!', 'success')
    except Exception as e:
        current_app.logger.error(f"Delete blog error: {str(e)}")
        db.session.rollback()
        flash('Error deleting blog post', 'error')
    return redirect(url_for('admin.blog'))


# ==================== CONTACTS ====================

@admin_bp.route('/contacts')
@admin_required
def contacts():
    """Contact messages, newest first, optionally filtered by status"""
    page = get_page_number()
    status = request.args.get('status', '').strip()
    query = Contact.query
    if status:
        query = query.filter(Contact.status == status)
    total = query.count()
    messages = (query.order_by(Contact.created_at.desc())
                .offset((page - 1) * CONTACTS_PER_PAGE)
                .limit(CONTACTS_PER_PAGE).all())
    return render_template('admin/contacts/index.html',
                           title='Contact Messages',
                           contacts=messages,
                           current_page=page,
                           total_pages=total_pages(total, CONTACTS_PER_PAGE),
                           selected_status=status,
                           statuses=CONTACT_STATUSES,
                           total=total)


@admin_bp.route('/contacts/view/<int:contact_id>')
@admin_required
def view_contact(contact_id):
    """Opening a new message marks it as read"""
    message = db.session.get(Contact, contact_id)
    if not message:
        flash('Contact not found', 'error')
        return redirect(url_for('admin.contacts'))

    if message.mark_read():
        db.session.commit()

    return render_template('admin/contacts/view.html',
                           title=f'Message from {message.name}',
                           contact=message,
                           statuses=CONTACT_STATUSES,
                           priorities=CONTACT_PRIORITIES)


@admin_bp.route('/contacts/update/<int:contact_id>', methods=['POST'])
@admin_required
def update_contact(contact_id):
    message = db.session.get(Contact, contact_id)
    if not message:
        flash('Contact not found', 'error')
        return redirect(url_for('admin.contacts'))

    try:
        attrs = clean_contact_update(request.form)
    except ValidationError as e:
        _flash_errors(e)
        return redirect(url_for('admin.view_contact', contact_id=contact_id))

    try:
        message.apply_triage(**attrs)
        db.session.commit()
        flash('Contact updated successfully!', 'success')
    except Exception as e:
        current_app.logger.error(f"Update contact error: {str(e)}")
        db.session.rollback()
        flash('Error updating contact', 'error')
    return redirect(url_for('admin.view_contact', contact_id=contact_id))


@admin_bp.route('/contacts/delete/<int:contact_id>', methods=['POST'])
@admin_required
def delete_contact(contact_id):
    message = db.session.get(Contact, contact_id)
    if not message:
        flash('Contact not found', 'error')
        return redirect(url_for('admin.contacts'))
    try:
        db.session.delete(message)
        db.session.commit()
        flash('Contact deleted successfully!', 'success')
    except Exception as e:
        current_app.logger.error(f"Delete contact error: {str(e)}")
        db.session.rollback()
        flash('Error deleting contact', 'error')
    return redirect(url_for('admin.contacts'))


# ==================== PROFILE ====================

@admin_bp.route('/profile')
@admin_required
def profile():
    return render_template('admin/profile/index.html', title='Your Profile', user=current_user)


@admin_bp.route('/profile/edit', methods=['GET', 'POST'])
@admin_required
def edit_profile():
    """Update name, email and avatar URL"""
    user = db.session.get(User, current_user.id)

    if request.method == 'POST':
        name = request.form.get('name', '').strip()
        email = request.form.get('email', '').strip().lower()
        avatar = request.form.get('avatar', '').strip()

        if not (2 <= len(name) <= 50):
            flash('Name must be between 2 and 50 characters', 'error')
            return redirect(url_for('admin.edit_profile'))
        if not EMAIL_RE.match(email):
            flash('Please provide a valid email address', 'error')
            return redirect(url_for('admin.edit_profile'))
        if avatar and not (URL_RE.match(avatar) or re.match(r'^/\S+', avatar)):
            flash('Avatar must be a URL', 'error')
            return redirect(url_for('admin.edit_profile'))
        if email != user.email:
            existing = get_user_by_email(email)
            if existing and existing.id != user.id:
                flash('Email is already taken by another user', 'error')
                return redirect(url_for('admin.edit_profile'))

        try:
            user.name = name
            user.email = email
            if 'avatar' in request.form:
                user.avatar = avatar
            db.session.commit()
            session['user'] = user.session_payload()
            flash('Profile updated successfully!', 'success')
            return redirect(url_for('admin.profile'))
        except Exception as e:
            current_app.logger.error(f"Update profile error: {str(e)}")
            db.session.rollback()
            flash('Error updating profile', 'error')
            return redirect(url_for('admin.edit_profile'))

    return render_template('admin/profile/edit.html', title='Edit Profile', user=user)


@admin_bp.route('/profile/change-password', methods=['GET', 'POST'])
@admin_required
def change_password():
    if request.method == 'POST':
        user = db.session.get(User, current_user.id)
        errors = validate_password_change(
            user,
            request.form.get('currentPassword', ''),
            request.form.get('newPassword', ''),
            request.form.get('confirmPassword', '')
        )
        if errors:
            for message in errors:
                flash(message, 'error')
            return redirect(url_for('admin.change_password'))

        try:
            user.set_password(request.form.get('newPassword'))
            db.session.commit()
            current_app.logger.info(f"Password changed for {user.email}")
            flash('Password changed successfully!', 'success')
            return redirect(url_for('admin.profile'))
        except Exception as e:
            current_app.logger.error(f"Change password error: {str(e)}")
            db.session.rollback()
            flash('Error changing password', 'error')
            return redirect(url_for('admin.change_password'))

    return render_template('admin/change_password.html', title='Change Password')

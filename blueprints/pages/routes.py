"""
Pages Routes - Public portfolio pages
"""

import os
from flask import render_template, redirect, url_for, request, flash, send_file, current_app
from extensions import db
from models import Project, Blog, Contact
from utils.data import (
    visible_projects,
    visible_skills,
    published_blogs,
    project_ordering,
    skill_ordering,
    filter_blogs_by_tags,
    search_blogs,
    distinct_tags,
    increment_counter
)
from utils.helpers import group_by_category, get_page_number, total_pages
from utils.notifications import notify_new_contact
from utils.security import get_client_ip, get_user_agent
from utils.validation import (
    ValidationError,
    clean_contact,
    PROJECT_CATEGORIES,
    BLOG_CATEGORIES
)
from . import pages_bp


PROJECTS_PER_PAGE = 9
POSTS_PER_PAGE = 6


def _visible_skill_list():
    return visible_skills().order_by(*skill_ordering()).all()


@pages_bp.route('/')
def index():
    """Home page - featured projects, skills and posts"""
    try:
        featured_projects = (visible_projects()
                             .filter(Project.featured.is_(True))
                             .order_by(Project.order.asc())
                             .limit(6).all())
        grouped_skills = group_by_category(_visible_skill_list())
        featured_blogs = (published_blogs()
                          .filter(Blog.featured.is_(True))
                          .order_by(Blog.published_at.desc())
                          .limit(3).all())
    except Exception as e:
        current_app.logger.error(f"Home page error: {str(e)}")
        flash('Error loading page content', 'error')
        featured_projects, grouped_skills, featured_blogs = [], {}, []

    return render_template('pages/index.html',
                           title='Portfolio - Welcome',
                           featured_projects=featured_projects,
                           grouped_skills=grouped_skills,
                           featured_blogs=featured_blogs)


@pages_bp.route('/about')
def about():
    """About page"""
    try:
        grouped_skills = group_by_category(_visible_skill_list())
    except Exception as e:
        current_app.logger.error(f"About page error: {str(e)}")
        flash('Error loading about page', 'error')
        grouped_skills = {}
    return render_template('pages/about.html', title='About Me', grouped_skills=grouped_skills)


@pages_bp.route('/skills')
def skills():
    """Skills page with featured skills and summary numbers"""
    try:
        skill_list = _visible_skill_list()
    except Exception as e:
        current_app.logger.error(f"Skills page error: {str(e)}")
        flash('Error loading skills page', 'error')
        skill_list = []

    featured_skills = sorted(
        [s for s in skill_list if s.proficiency >= 80],
        key=lambda s: s.proficiency, reverse=True)[:6]
    avg_experience = 0
    if skill_list:
        avg_experience = round(sum(s.years_of_experience or 0 for s in skill_list) / len(skill_list))

    return render_template('pages/skills.html',
                           title='My Skills & Expertise',
                           grouped_skills=group_by_category(skill_list),
                           featured_skills=featured_skills,
                           total_skills=len(skill_list),
                           avg_experience=avg_experience)


@pages_bp.route('/projects')
def projects():
    """Public project listing"""
    page = get_page_number()
    category = request.args.get('category', '').strip()

    query = visible_projects()
    if category:
        query = query.filter(Project.category == category)

    try:
        total = query.count()
        project_list = (query.order_by(*project_ordering())
                        .offset((page - 1) * PROJECTS_PER_PAGE)
                        .limit(PROJECTS_PER_PAGE).all())
    except Exception as e:
        current_app.logger.error(f"Projects page error: {str(e)}")
        flash('Error loading projects', 'error')
        total, project_list = 0, []

    return render_template('pages/projects.html',
                           title='My Projects',
                           projects=project_list,
                           current_page=page,
                           total_pages=total_pages(total, PROJECTS_PER_PAGE),
                           selected_category=category,
                           categories=PROJECT_CATEGORIES)


@pages_bp.route('/projects/<int:project_id>')
def project_detail(project_id):
    """Single public project"""
    project = visible_projects().filter(Project.id == project_id).first()
    if not project:
        flash('Project not found', 'error')
        return redirect(url_for('pages.projects'))

    related_projects = (visible_projects()
                        .filter(Project.category == project.category, Project.id != project.id)
                        .order_by(Project.order.asc())
                        .limit(3).all())
    return render_template('pages/project_detail.html',
                           title=project.title,
                           project=project,
                           related_projects=related_projects)


@pages_bp.route('/blog')
def blog():
    """Published posts with category, tag and search filters"""
    page = get_page_number()
    category = request.args.get('category', '').strip()
    tag = request.args.get('tag', '').strip()
    search = request.args.get('search', '').strip()

    query = published_blogs()
    if category:
        query = query.filter(Blog.category == category)
    if tag:
        query = filter_blogs_by_tags(query, tag)
    if search:
        query = search_blogs(query, search)

    try:
        total = query.count()
        posts = (query.order_by(Blog.featured.desc(), Blog.published_at.desc())
                 .offset((page - 1) * POSTS_PER_PAGE)
                 .limit(POSTS_PER_PAGE).all())
        tags = distinct_tags(published_blogs().all())
    except Exception as e:
        current_app.logger.error(f"Blog page error: {str(e)}")
        flash('Error loading blog posts', 'error')
        total, posts, tags = 0, [], []

    return render_template('pages/blog.html',
                           title='Blog',
                           blogs=posts,
                           current_page=page,
                           total_pages=total_pages(total, POSTS_PER_PAGE),
                           selected_category=category,
                           selected_tag=tag,
                           search_query=search,
                           categories=BLOG_CATEGORIES,
                           tags=tags)


@pages_bp.route('/blog/<slug>')
def blog_detail(slug):
    """Single published post; every view is counted"""
    post = published_blogs().filter(Blog.slug == slug).first()
    if not post:
        flash('Blog post not found', 'error')
        return redirect(url_for('pages.blog'))

    increment_counter(post, 'views')

    related_posts = (published_blogs()
                     .filter(Blog.id != post.id)
                     .order_by(Blog.published_at.desc())
                     .limit(3).all())
    return render_template('pages/blog_detail.html',
                           title=post.title,
                           blog=post,
                           related_posts=related_posts)


@pages_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact form"""
    if request.method == 'GET':
        return render_template('pages/contact.html', title='Contact Me', form_data={})

    try:
        attrs = clean_contact(request.form)
    except ValidationError as e:
        current_app.logger.info(f"Contact form rejected: {e.message}")
        for error in e.errors:
            flash(error['message'], 'error')
        return render_template('pages/contact.html', title='Contact Me',
                               form_data=request.form, errors=e.errors), 400

    try:
        message = Contact(ip_address=get_client_ip(), user_agent=get_user_agent(), **attrs)
        db.session.add(message)
        db.session.commit()
        current_app.logger.info(f"Contact message saved, id: {message.id}")
    except Exception as e:
        current_app.logger.error(f"Contact form error: {str(e)}")
        db.session.rollback()
        flash('There was an error sending your message. Please try again.', 'error')
        return render_template('pages/contact.html', title='Contact Me', form_data=request.form), 500

    notify_new_contact(message)

    flash('Thank you for your message! I will get back to you soon.', 'success')
    return redirect(url_for('pages.contact'))


@pages_bp.route('/resume')
def resume():
    """Download the configured resume file"""
    resume_path = current_app.config.get('RESUME_PATH')
    if not resume_path or not os.path.exists(resume_path):
        flash('Resume not found. Please get in touch for the latest version.', 'error')
        return redirect(url_for('pages.index'))

    return send_file(
        resume_path,
        as_attachment=True,
        download_name=current_app.config.get('RESUME_DOWNLOAD_NAME', 'Resume.pdf')
    )

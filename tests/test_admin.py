import pytest
from extensions import db
from models import User, Project, Skill, Blog, Contact
from tests.factories import ADMIN_EMAIL, ADMIN_PASSWORD, make_project, make_skill, make_blog, make_contact


PROJECT_FORM = {
    'title': 'Form Project',
    'description': 'Created through the admin form',
    'technologies': 'Python, Flask',
    'category': 'web',
    'status': 'planning',
    'isPublic': 'on',
}

BLOG_FORM = {
    'title': 'Admin Written Post',
    'excerpt': 'Written from the admin panel',
    'content': 'Long enough content for the admin written post.',
    'category': 'personal',
    'tags': 'life, notes',
}


@pytest.mark.parametrize('path', ['/admin/', '/admin/projects', '/admin/skills', '/admin/blog',
                                  '/admin/contacts', '/admin/profile'])
def test_admin_pages_require_login(client, path):
    response = client.get(path)
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin/login')


def test_access_denied_flash(client):
    response = client.get('/admin/', follow_redirects=True)
    assert b'Access denied. Admin privileges required.' in response.data


def test_login_with_wrong_password(client):
    response = client.post('/admin/login', data={'email': ADMIN_EMAIL, 'password': 'bad'},
                           follow_redirects=True)
    assert b'Invalid email or password' in response.data


def test_login_rejects_non_admin(app, client):
    with app.app_context():
        user = User(name='Reader', email='reader@example.com', role='user')
        user.set_password('reader123')
        db.session.add(user)
        db.session.commit()
    response = client.post('/admin/login', data={'email': 'reader@example.com', 'password': 'reader123'},
                           follow_redirects=True)
    assert b'Access denied. Admin privileges required.' in response.data
    assert client.get('/admin/').status_code == 302


def test_login_welcome_and_dashboard(app, client):
    make_contact(app, subject='Dashboard message')
    response = client.post('/admin/login', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD},
                           follow_redirects=True)
    assert response.status_code == 200
    assert b'Welcome back, Site Admin!' in response.data
    assert b'Dashboard message' in response.data


def test_logged_in_admin_is_sent_to_dashboard(admin_client):
    response = admin_client.get('/admin/login')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin/')


def test_logout(admin_client):
    response = admin_client.post('/admin/logout', follow_redirects=True)
    assert b'Logged out successfully' in response.data
    assert admin_client.get('/admin/').status_code == 302


def test_list_pages_render(app, admin_client):
    make_project(app)
    make_skill(app)
    make_blog(app)
    make_contact(app)
    for path in ['/admin/', '/admin/projects', '/admin/skills', '/admin/blog', '/admin/contacts',
                 '/admin/profile', '/admin/profile/edit', '/admin/profile/change-password',
                 '/admin/projects/add', '/admin/skills/add', '/admin/blog/add']:
        assert admin_client.get(path).status_code == 200, path


@pytest.mark.parametrize('path', ['/admin/projects', '/admin/blog', '/admin/contacts'])
def test_list_pages_clamp_huge_page_numbers(app, admin_client, path):
    make_project(app)
    response = admin_client.get(f'{path}?page=99999999999999999999')
    assert response.status_code == 200


def test_add_project_from_form(app, admin_client):
    response = admin_client.post('/admin/projects/add', data=PROJECT_FORM, follow_redirects=True)
    assert b'Project created successfully!' in response.data
    with app.app_context():
        project = Project.query.filter_by(title='Form Project').one()
        assert project.technology_list == ['Python', 'Flask']
        assert project.featured is False
        assert project.is_public is True


def test_add_project_validation_error(app, admin_client):
    response = admin_client.post('/admin/projects/add', data=dict(PROJECT_FORM, title='x'),
                                 follow_redirects=True)
    assert b'Title must be between 2 and 100 characters' in response.data
    with app.app_context():
        assert Project.query.count() == 0


def test_edit_and_view_project(app, admin_client):
    project_id = make_project(app)
    assert admin_client.get(f'/admin/projects/view/{project_id}').status_code == 200
    assert admin_client.get(f'/admin/projects/edit/{project_id}').status_code == 200
    admin_client.post(f'/admin/projects/edit/{project_id}', data=dict(PROJECT_FORM, title='Edited Title'))
    with app.app_context():
        assert db.session.get(Project, project_id).title == 'Edited Title'


def test_toggle_project_flags(app, admin_client):
    project_id = make_project(app)
    body = admin_client.post(f'/admin/projects/{project_id}/toggle-featured').get_json()
    assert body == {'success': True, 'message': 'Project marked as featured', 'featured': True}
    body = admin_client.post(f'/admin/projects/{project_id}/toggle-visibility').get_json()
    assert body['isPublic'] is False


def test_delete_project(app, admin_client):
    project_id = make_project(app)
    admin_client.post(f'/admin/projects/delete/{project_id}')
    with app.app_context():
        assert db.session.get(Project, project_id) is None


def test_missing_project_redirects(admin_client):
    response = admin_client.get('/admin/projects/edit/999', follow_redirects=True)
    assert b'Project not found' in response.data


@pytest.mark.parametrize('value', [0, 101, 'abc'])
def test_update_proficiency_rejects_out_of_range(app, admin_client, value):
    skill_id = make_skill(app, proficiency=40)
    response = admin_client.post(f'/admin/skills/{skill_id}/update-proficiency', json={'proficiency': value})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Proficiency must be between 1 and 100'
    with app.app_context():
        assert db.session.get(Skill, skill_id).proficiency == 40


def test_update_proficiency(app, admin_client):
    skill_id = make_skill(app, proficiency=40)
    body = admin_client.post(f'/admin/skills/{skill_id}/update-proficiency', data={'proficiency': '75'}).get_json()
    assert body['proficiency'] == 75


def test_skill_form_duplicate_name(app, admin_client):
    make_skill(app, name='Python')
    response = admin_client.post('/admin/skills/add',
                                 data={'name': 'Python', 'category': 'backend', 'proficiency': '50'},
                                 follow_redirects=True)
    assert b'Skill with this name already exists' in response.data


def test_toggle_skill_visibility(app, admin_client):
    skill_id = make_skill(app)
    body = admin_client.post(f'/admin/skills/{skill_id}/toggle-visibility').get_json()
    assert body['isVisible'] is False


def test_add_blog_draft_and_published(app, admin_client):
    response = admin_client.post('/admin/blog/add', data=dict(BLOG_FORM, status='draft'), follow_redirects=True)
    assert b'Blog post saved as draft!' in response.data

    response = admin_client.post('/admin/blog/add', data=dict(BLOG_FORM, title='Second Admin Post', status='published'),
                                 follow_redirects=True)
    assert b'Blog post published successfully!' in response.data

    with app.app_context():
        post = Blog.query.filter_by(slug='second-admin-post').one()
        assert post.author.email == ADMIN_EMAIL
        assert post.published_at is not None
        assert post.tag_list == ['life', 'notes']


def test_edit_blog_form_renders(app, admin_client):
    blog_id = make_blog(app)
    assert admin_client.get(f'/admin/blog/edit/{blog_id}').status_code == 200


def test_view_contact_marks_read_once(app, admin_client):
    contact_id = make_contact(app)
    assert admin_client.get(f'/admin/contacts/view/{contact_id}').status_code == 200
    with app.app_context():
        assert db.session.get(Contact, contact_id).status == 'read'


def test_update_contact(app, admin_client):
    contact_id = make_contact(app)
    admin_client.post(f'/admin/contacts/update/{contact_id}',
                      data={'status': 'replied', 'priority': 'high', 'notes': 'Emailed back'})
    with app.app_context():
        contact = db.session.get(Contact, contact_id)
        assert contact.status == 'replied'
        assert contact.replied is True
        assert contact.notes == 'Emailed back'


def test_contacts_status_filter(app, admin_client):
    make_contact(app, subject='Closed thread', status='closed')
    make_contact(app, subject='Fresh thread')
    response = admin_client.get('/admin/contacts?status=closed')
    assert b'Closed thread' in response.data
    assert b'Fresh thread' not in response.data


def test_edit_profile_rejects_taken_email(app, admin_client):
    with app.app_context():
        other = User(name='Other', email='other@example.com', role='user')
        other.set_password('other123')
        db.session.add(other)
        db.session.commit()
    response = admin_client.post('/admin/profile/edit',
                                 data={'name': 'Site Admin', 'email': 'other@example.com'},
                                 follow_redirects=True)
    assert b'Email is already taken by another user' in response.data


def test_edit_profile(app, admin_client):
    response = admin_client.post('/admin/profile/edit',
                                 data={'name': 'Renamed Admin', 'email': ADMIN_EMAIL, 'avatar': '/static/me.png'},
                                 follow_redirects=True)
    assert b'Profile updated successfully!' in response.data
    assert b'Renamed Admin' in response.data


def test_change_password(app, admin_client):
    response = admin_client.post('/admin/profile/change-password', data={
        'currentPassword': 'wrong', 'newPassword': 'abc', 'confirmPassword': 'abd'}, follow_redirects=True)
    assert b'Current password is incorrect' in response.data
    assert b'New password must be at least 6 characters' in response.data
    assert b'New password and confirmation do not match' in response.data

    response = admin_client.post('/admin/profile/change-password', data={
        'currentPassword': ADMIN_PASSWORD, 'newPassword': 'brandnew1', 'confirmPassword': 'brandnew1'},
        follow_redirects=True)
    assert b'Password changed successfully!' in response.data
    with app.app_context():
        assert User.query.filter_by(email=ADMIN_EMAIL).one().check_password('brandnew1')

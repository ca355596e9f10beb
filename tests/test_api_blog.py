from datetime import datetime
from extensions import db
from models import Blog
from tests.factories import make_blog


NEW_POST = {
    'title': 'Deploying Flask Apps',
    'excerpt': 'Notes on running Flask in production',
    'content': 'Gunicorn, a reverse proxy and environment based config.',
    'category': 'tutorials',
    'status': 'published',
    'tags': 'flask, deployment',
}


def test_public_list_only_published_and_without_content(app, client):
    make_blog(app, title='Visible Post')
    make_blog(app, title='Draft Post', status='draft')

    body = client.get('/api/blog').get_json()
    assert body['total'] == 1
    post = body['data'][0]
    assert post['title'] == 'Visible Post'
    assert 'content' not in post
    assert post['author']['email'] == 'admin@example.com'


def test_admin_sees_drafts_and_filters_status(app, api_admin):
    make_blog(app, title='Visible Post')
    make_blog(app, title='Draft Post', status='draft')
    assert api_admin.get('/api/blog').get_json()['total'] == 2
    body = api_admin.get('/api/blog?status=draft').get_json()
    assert [p['title'] for p in body['data']] == ['Draft Post']


def test_tag_and_search_filters(app, client):
    make_blog(app, title='Flask Tips Post', tags=['flask'])
    make_blog(app, title='Django Notes Post', tags=['django'], content='Models and views with plenty of text.')

    body = client.get('/api/blog?tags=django,rails').get_json()
    assert [p['title'] for p in body['data']] == ['Django Notes Post']

    body = client.get('/api/blog?search=tips').get_json()
    assert [p['title'] for p in body['data']] == ['Flask Tips Post']


def test_filters_treat_wildcards_literally(app, client):
    make_blog(app, title='Test Coverage At 100% Now', tags=['flask'])
    make_blog(app, title='Plain Title Post', tags=['python'])

    body = client.get('/api/blog?search=%25').get_json()
    assert [p['title'] for p in body['data']] == ['Test Coverage At 100% Now']

    body = client.get('/api/blog?tags=fl_sk').get_json()
    assert body['data'] == []


def test_tags_endpoint_sorted_and_distinct(app, client):
    make_blog(app, title='First Post Here', tags=['python', 'flask'])
    make_blog(app, title='Second Post Here', tags=['api', 'python'])
    make_blog(app, title='Draft Post Here', tags=['secret'], status='draft')
    assert client.get('/api/blog/tags').get_json()['data'] == ['api', 'flask', 'python']


def test_get_by_slug_counts_views(app, client):
    make_blog(app, title='Counted Post')
    first = client.get('/api/blog/counted-post').get_json()['data']
    second = client.get('/api/blog/counted-post').get_json()['data']
    assert first['views'] == 1
    assert second['views'] == 2
    assert 'content' in second


def test_draft_by_slug_is_not_found_for_public(app, client):
    make_blog(app, title='Hidden Draft', status='draft')
    response = client.get('/api/blog/hidden-draft')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Blog post not found'


def test_like(app, client):
    blog_id = make_blog(app)
    assert client.post(f'/api/blog/{blog_id}/like').get_json()['likes'] == 1
    assert client.post(f'/api/blog/{blog_id}/like').get_json()['likes'] == 2


def test_like_unpublished(app, client):
    blog_id = make_blog(app, status='draft')
    response = client.post(f'/api/blog/{blog_id}/like')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Cannot like unpublished blog post'


def test_create_sets_author_slug_and_published_at(app, api_admin):
    response = api_admin.post('/api/blog', json=NEW_POST)
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['slug'] == 'deploying-flask-apps'
    assert data['publishedAt'] is not None
    assert data['tags'] == ['flask', 'deployment']
    assert data['author']['name'] == 'Site Admin'


def test_create_duplicate_slug(app, api_admin):
    make_blog(app, title='Deploying Flask Apps')
    response = api_admin.post('/api/blog', json=NEW_POST)
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Blog post with this slug already exists'


def test_update_keeps_published_at(app, api_admin):
    when = datetime(2024, 2, 1, 9, 30)
    blog_id = make_blog(app, published_at=when)
    response = api_admin.put(f'/api/blog/{blog_id}', json={'excerpt': 'A brand new excerpt here', 'status': 'published'})
    assert response.status_code == 200
    assert response.get_json()['data']['publishedAt'] == when.isoformat()


def test_delete(app, api_admin):
    blog_id = make_blog(app)
    response = api_admin.delete(f'/api/blog/{blog_id}')
    assert response.status_code == 200
    with app.app_context():
        assert db.session.get(Blog, blog_id) is None


def test_write_requires_admin(app, client):
    blog_id = make_blog(app)
    assert client.post('/api/blog', json=NEW_POST).status_code == 401
    assert client.delete(f'/api/blog/{blog_id}').status_code == 401

from extensions import db
from models import Project
from tests.factories import make_project
from utils.cache import content_cache


NEW_PROJECT = {
    'title': 'Realtime Chat',
    'description': 'A websocket chat application',
    'technologies': ['Python', 'Socket.IO'],
    'category': 'web',
    'status': 'in-progress',
}


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'OK'


def test_public_list_hides_private_projects(app, client):
    make_project(app, title='Public One')
    make_project(app, title='Secret One', is_public=False)

    body = client.get('/api/projects').get_json()
    assert body['success'] is True
    assert body['total'] == 1
    assert [p['title'] for p in body['data']] == ['Public One']


def test_admin_list_includes_private_projects(app, api_admin):
    make_project(app, title='Public One')
    make_project(app, title='Secret One', is_public=False)

    body = api_admin.get('/api/projects').get_json()
    assert body['total'] == 2


def test_list_orders_featured_first_and_paginates(app, client):
    for i in range(3):
        make_project(app, title=f'Project {i}', order=i)
    make_project(app, title='Star Project', featured=True, order=9)

    body = client.get('/api/projects?limit=2').get_json()
    assert body['count'] == 2
    assert body['total'] == 4
    assert body['data'][0]['title'] == 'Star Project'
    assert body['pagination'] == {'next': {'page': 2, 'limit': 2}}

    body = client.get('/api/projects?limit=2&page=2').get_json()
    assert [p['title'] for p in body['data']] == ['Project 1', 'Project 2']
    assert body['pagination'] == {'prev': {'page': 1, 'limit': 2}}


def test_category_filter(app, client):
    make_project(app, title='Web Thing', category='web')
    make_project(app, title='Api Thing', category='api')
    body = client.get('/api/projects?category=api').get_json()
    assert [p['title'] for p in body['data']] == ['Api Thing']


def test_private_project_detail_is_not_found_for_public(app, client, api_admin):
    project_id = make_project(app, is_public=False)
    response = client.get(f'/api/projects/{project_id}')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'Project not found'}
    assert api_admin.get(f'/api/projects/{project_id}').status_code == 200


def test_write_requires_admin(client):
    response = client.post('/api/projects', json=NEW_PROJECT)
    assert response.status_code == 401
    assert response.get_json()['message'] == 'Not authorized to access this route'


def test_create_update_delete(app, api_admin):
    response = api_admin.post('/api/projects', json=NEW_PROJECT)
    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['technologies'] == ['Python', 'Socket.IO']
    assert data['isPublic'] is True
    project_id = data['id']

    response = api_admin.put(f'/api/projects/{project_id}', json={'featured': True})
    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['featured'] is True
    assert data['title'] == 'Realtime Chat'

    response = api_admin.delete(f'/api/projects/{project_id}')
    assert response.get_json()['message'] == 'Project deleted successfully'
    with app.app_context():
        assert db.session.get(Project, project_id) is None


def test_create_validation_error(api_admin):
    response = api_admin.post('/api/projects', json={'title': 'x'})
    assert response.status_code == 400
    body = response.get_json()
    assert body['message'] == 'Validation failed'
    assert {'title', 'description', 'technologies', 'category'} <= {e['field'] for e in body['errors']}


def test_reorder(app, api_admin):
    first = make_project(app, title='First')
    second = make_project(app, title='Second')
    response = api_admin.put('/api/projects/reorder', json={'projects': [
        {'id': first, 'order': 5}, {'id': second, 'order': 1}]})
    assert response.status_code == 200
    with app.app_context():
        assert db.session.get(Project, first).order == 5
        assert db.session.get(Project, second).order == 1


def test_public_list_reflects_admin_writes_immediately(app, client, api_admin):
    assert client.get('/api/projects').get_json()['total'] == 0
    api_admin.post('/api/projects', json=NEW_PROJECT)
    assert client.get('/api/projects').get_json()['total'] == 1


def test_featured_endpoint(app, client):
    make_project(app, title='Featured', featured=True)
    make_project(app, title='Hidden Featured', featured=True, is_public=False)
    body = client.get('/api/projects/featured').get_json()
    assert [p['title'] for p in body['data']] == ['Featured']


def test_unknown_api_route(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'API route not found'}


def test_cors_header_on_api(client):
    response = client.get('/api/projects')
    assert response.headers['Access-Control-Allow-Origin'] == 'http://localhost:3000'


def test_featured_and_filtered_list_are_cached_separately(app, client):
    make_project(app, title='Spotlight', featured=True)

    listed = client.get('/api/projects?featured=true&limit=6').get_json()
    featured = client.get('/api/projects/featured').get_json()
    assert listed['total'] == 1
    assert isinstance(featured['data'], list)
    assert featured['data'][0]['title'] == 'Spotlight'


def test_featured_first_does_not_replace_list_envelope(app, client):
    make_project(app, title='Spotlight', featured=True)

    assert isinstance(client.get('/api/projects/featured').get_json()['data'], list)
    listed = client.get('/api/projects?featured=true&limit=6').get_json()
    assert listed['success'] is True
    assert listed['total'] == 1
    assert 'pagination' in listed


def test_unknown_query_params_share_one_cache_entry(app, client):
    make_project(app, title='Public One')
    for i in range(20):
        assert client.get(f'/api/projects?junk={i}').status_code == 200
    assert len(content_cache) == 1


def test_huge_page_number_is_clamped(app, client):
    make_project(app, title='Public One')
    response = client.get('/api/projects?page=99999999999999999999')
    assert response.status_code == 200
    assert response.get_json()['data'] == []

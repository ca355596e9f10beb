from extensions import db
from models import Skill
from tests.factories import make_skill


def test_public_list_groups_visible_skills(app, client):
    make_skill(app, name='Flask', category='backend')
    make_skill(app, name='React', category='frontend')
    make_skill(app, name='Cobol', category='backend', is_visible=False)

    body = client.get('/api/skills').get_json()
    assert body['count'] == 2
    assert sorted(body['grouped']) == ['backend', 'frontend']
    assert [s['name'] for s in body['grouped']['backend']] == ['Flask']


def test_admin_can_filter_by_visibility(app, api_admin):
    make_skill(app, name='Flask')
    make_skill(app, name='Cobol', is_visible=False)
    body = api_admin.get('/api/skills?visible=false').get_json()
    assert [s['name'] for s in body['data']] == ['Cobol']


def test_hidden_skill_detail_not_found_for_public(app, client):
    skill_id = make_skill(app, is_visible=False)
    assert client.get(f'/api/skills/{skill_id}').status_code == 404


def test_categories_endpoint(app, client):
    make_skill(app, name='Docker', category='devops')
    body = client.get('/api/skills/categories').get_json()
    assert list(body['data']) == ['devops']


def test_create_rejects_invalid_proficiency(app, api_admin):
    response = api_admin.post('/api/skills', json={'name': 'Rust', 'category': 'backend', 'proficiency': 150})
    assert response.status_code == 400
    with app.app_context():
        assert Skill.query.filter_by(name='Rust').first() is None


def test_create_duplicate_name(app, api_admin):
    make_skill(app, name='Python')
    response = api_admin.post('/api/skills', json={'name': 'Python', 'category': 'backend', 'proficiency': 70})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Skill with this name already exists'


def test_update_invalidates_public_cache(app, client, api_admin):
    skill_id = make_skill(app, name='Python', proficiency=60)
    assert client.get('/api/skills').get_json()['data'][0]['proficiency'] == 60

    response = api_admin.put(f'/api/skills/{skill_id}', json={'proficiency': 90})
    assert response.status_code == 200
    assert client.get('/api/skills').get_json()['data'][0]['proficiency'] == 90


def test_update_rejects_zero_proficiency(app, api_admin):
    skill_id = make_skill(app, proficiency=60)
    response = api_admin.put(f'/api/skills/{skill_id}', json={'proficiency': 0})
    assert response.status_code == 400
    with app.app_context():
        assert db.session.get(Skill, skill_id).proficiency == 60


def test_delete_and_reorder(app, api_admin):
    first = make_skill(app, name='One')
    second = make_skill(app, name='Two')
    response = api_admin.put('/api/skills/reorder', json={'skills': [{'id': second, 'order': 3}]})
    assert response.status_code == 200
    assert api_admin.delete(f'/api/skills/{first}').status_code == 200
    with app.app_context():
        assert db.session.get(Skill, first) is None
        assert db.session.get(Skill, second).order == 3


def test_bulk_create(app, api_admin):
    response = api_admin.post('/api/skills/bulk', json={'skills': [
        {'name': 'Go', 'category': 'backend', 'proficiency': 70},
        {'name': 'Vue', 'category': 'frontend', 'proficiency': 65},
    ]})
    assert response.status_code == 201
    assert response.get_json()['count'] == 2


def test_bulk_create_rejects_whole_batch(app, api_admin):
    response = api_admin.post('/api/skills/bulk', json={'skills': [
        {'name': 'Go', 'category': 'backend', 'proficiency': 70},
        {'name': 'go', 'category': 'backend', 'proficiency': 70},
        {'name': 'Bad', 'category': 'nope', 'proficiency': 70},
    ]})
    assert response.status_code == 400
    fields = {e['field'] for e in response.get_json()['errors']}
    assert fields == {'skills[1].name', 'skills[2].category'}
    with app.app_context():
        assert Skill.query.count() == 0


def test_bulk_create_requires_array(api_admin):
    response = api_admin.post('/api/skills/bulk', json={'skills': []})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Please provide an array of skills'

import io

import pytest

from sensor_label.app import app

DEXCOM_LABEL = "DEXCOM G7 (21)987654321098 (10)LOT4455XY (17)2026-03-15"


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def test_home(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.get_json()['service'] == 'sensor-label-extractor'


def test_extract_json(client):
    response = client.post('/extract', json={'text': DEXCOM_LABEL})
    assert response.status_code == 200
    data = response.get_json()
    assert data['serialNumber'] == '987654321098'
    assert data['manufacturer'] == 'Dexcom'
    assert data['confidence'] == 100
    assert data['needsReview'] is False
    assert data['confidenceDetails']


def test_extract_form_field(client):
    response = client.post('/extract', data={'text': 'FREESTYLE LIBRE 3 SN 0M0012AB3C'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['modelName'] == 'Libre 3'
    assert data['serialNumber'] == '0M0012AB3C'


def test_extract_text_file_upload(client):
    data = {'file': (io.BytesIO(DEXCOM_LABEL.encode('utf-8')), 'label.txt')}
    response = client.post('/extract', data=data, content_type='multipart/form-data')
    assert response.status_code == 200
    assert response.get_json()['lotNumber'] == 'LOT4455XY'


def test_extract_rejects_other_uploads(client):
    data = {'file': (io.BytesIO(b'\x89PNG'), 'label.png')}
    response = client.post('/extract', data=data, content_type='multipart/form-data')
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_extract_without_text(client):
    response = client.post('/extract', json={})
    assert response.status_code == 400


def test_extract_empty_text(client):
    response = client.post('/extract', json={'text': ''})
    assert response.status_code == 200
    assert response.get_json() == {'confidence': 0, 'confidenceDetails': [], 'needsReview': True}


def test_validate(client):
    response = client.post('/validate', json={
        'serialNumber': '987654321098', 'manufacturer': 'Dexcom', 'lotNumber': 'LOT4455XY'})
    assert response.status_code == 200
    assert response.get_json() == {'serialValid': True, 'lotValid': True}

    response = client.post('/validate', json={'serialNumber': 'AB12', 'manufacturer': 'Dexcom'})
    assert response.get_json() == {'serialValid': False, 'lotValid': False}


def test_validate_requires_json_object(client):
    response = client.post('/validate', data='not json', content_type='text/plain')
    assert response.status_code == 400

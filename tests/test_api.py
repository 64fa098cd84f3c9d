"""
API tests using FastAPI's TestClient against the test database session.
"""

import io

import openpyxl
import pytest

from api.config import settings
from services.spreadsheet_service import XLSX_CONTENT_TYPE
from services.templates import RSVP_EXPORT_COLUMNS

GUEST_HEADERS = ['name', 'email', 'allocatedSeats', 'notes']
ENTOURAGE_HEADERS = ['name', 'role', 'category', 'side', 'description', 'sortOrder']


def upload(client, path, content, filename='upload.xlsx'):
    return client.post(path, files={'file': (filename, content, XLSX_CONTENT_TYPE)})


def add_guest(client, **fields):
    body = {'name': 'The Santos Family', 'email': 'santos@example.com', 'allocatedSeats': 4}
    body.update(fields)
    response = client.post('/api/admin/guests', json=body)
    assert response.status_code == 200
    return response.json()['guest']


class TestGuestUpload:

    def test_upload_assigns_codes(self, client, make_workbook):
        content = make_workbook(GUEST_HEADERS, [
            ['John & Jane Smith', 'john@example.com', 2, 'Couple from work'],
            ['Maria Garcia', None, 1, None],
        ])

        response = upload(client, '/api/admin/upload', content, 'guests.xlsx')

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['data']['totalProcessed'] == 2
        guests = body['data']['guests']
        assert [g['name'] for g in guests] == ['John & Jane Smith', 'Maria Garcia']
        assert all(len(g['invitationCode']) == 8 for g in guests)
        # Nothing is persisted by the upload itself
        assert client.get('/api/admin/guests').json() == []

    def test_invalid_row_rejects_file(self, client, make_workbook):
        content = make_workbook(GUEST_HEADERS, [['', None, 2, None]])

        response = upload(client, '/api/admin/upload', content, 'guests.xlsx')

        assert response.status_code == 400
        assert response.json() == {
            'success': False,
            'error': 'Validation errors found',
            'data': {'guests': [], 'totalProcessed': 0, 'errors': ['Row 2: Name is required']},
        }

    def test_repeated_explicit_codes_reject_file(self, client, make_workbook):
        content = make_workbook(GUEST_HEADERS + ['invitationCode'], [
            ['Ana Cruz', None, 1, None, 'SANTOS01'],
            ['Ben Cruz', None, 2, None, 'SANTOS01'],
        ])

        response = upload(client, '/api/admin/upload', content, 'guests.xlsx')

        assert response.status_code == 400
        assert response.json()['data']['errors'] == ['Row 3: Duplicate invitation code SANTOS01']

    def test_wrong_extension(self, client):
        response = upload(client, '/api/admin/upload', b'name\nAna', 'guests.csv')

        assert response.status_code == 400
        assert response.json()['error'] == 'Please upload an Excel file (.xlsx or .xls)'

    def test_uppercase_extension_accepted(self, client, make_workbook):
        content = make_workbook(GUEST_HEADERS, [['Ana', None, 1, None]])

        response = upload(client, '/api/admin/upload', content, 'GUESTS.XLSX')

        assert response.status_code == 200

    def test_missing_file(self, client):
        response = client.post('/api/admin/upload')

        assert response.status_code == 400
        assert response.json()['error'] == 'No file uploaded'

    def test_empty_workbook(self, client, make_workbook):
        response = upload(client, '/api/admin/upload', make_workbook(GUEST_HEADERS, []), 'guests.xlsx')

        assert response.status_code == 400
        assert response.json()['error'] == 'Excel file is empty or has no data'

    def test_unreadable_workbook(self, client):
        response = upload(client, '/api/admin/upload', b'not a workbook', 'guests.xlsx')

        assert response.status_code == 500
        assert response.json()['error'] == (
            'Failed to process Excel file. Please check the file format and try again.'
        )

    def test_template(self, client):
        response = client.get('/api/admin/template')

        assert response.status_code == 200
        assert response.headers['content-type'] == XLSX_CONTENT_TYPE
        assert 'guest-invitation-template.xlsx' in response.headers['content-disposition']


class TestEntourageUpload:

    def test_upload_inserts_members(self, client, make_workbook):
        content = make_workbook(ENTOURAGE_HEADERS, [
            ['Rommel Columbano', 'Best Man', 'other', 'both', None, 1],
            ['Josefina Igaya', 'Mother of the Bride', 'parents', 'bride', None, 1],
        ])

        response = upload(client, '/api/admin/entourage/upload', content, 'entourage.xlsx')

        assert response.status_code == 200
        body = response.json()
        assert body['message'] == 'Successfully uploaded 2 entourage members'
        assert body['insertedCount'] == 2
        assert body['totalProcessed'] == 2
        assert 'errors' not in body

        listed = client.get('/api/entourage').json()
        assert [m['name'] for m in listed] == ['Josefina Igaya', 'Rommel Columbano']

    def test_validation_errors(self, client, make_workbook):
        content = make_workbook(ENTOURAGE_HEADERS, [
            ['Antonio Igaya', 'Father of the Bride', 'parents', 'male', None, 1],
            ['Rommel Columbano', 'Best Man', 'other', 'both', None, 1],
        ])

        response = upload(client, '/api/admin/entourage/upload', content, 'entourage.xlsx')

        assert response.status_code == 400
        assert response.json() == {
            'error': 'Validation errors found',
            'errors': ['Row 2: For parents, side must be "bride" or "groom"'],
            'processedCount': 1,
            'totalRows': 2,
        }
        assert client.get('/api/entourage').json() == []

    def test_fractional_sort_order_rejected_before_insert(self, client, make_workbook):
        content = make_workbook(ENTOURAGE_HEADERS, [
            ['Rommel Columbano', 'Best Man', 'other', 'both', None, 1.5],
        ])

        response = upload(client, '/api/admin/entourage/upload', content, 'entourage.xlsx')

        assert response.status_code == 400
        assert response.json()['errors'] == ['Row 2: sortOrder must be a number']
        assert client.get('/api/entourage').json() == []

    def test_empty_workbook(self, client, make_workbook):
        response = upload(client, '/api/admin/entourage/upload', make_workbook(ENTOURAGE_HEADERS, []))

        assert response.status_code == 400
        assert response.json()['error'] == 'Excel file is empty'

    def test_wrong_extension(self, client):
        response = upload(client, '/api/admin/entourage/upload', b'x', 'entourage.txt')

        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid file type. Please upload an Excel file (.xlsx or .xls)'

    def test_unreadable_workbook(self, client):
        response = upload(client, '/api/admin/entourage/upload', b'not a workbook', 'entourage.xls')

        assert response.status_code == 500
        body = response.json()
        assert body['error'] == 'Failed to process upload'
        assert body['detail']['details']

    def test_template(self, client):
        response = client.get('/api/admin/entourage/template')

        workbook = openpyxl.load_workbook(io.BytesIO(response.content))
        assert [cell.value for cell in workbook.active[1]] == ENTOURAGE_HEADERS


class TestGuestsAndRSVPs:

    def test_add_and_lookup_guest(self, client):
        guest = add_guest(client, notes='Parents + 2 children')

        response = client.get('/api/guest', params={'id': guest['invitationCode']})

        assert response.status_code == 200
        assert response.json() == {'guest': {
            'invitationCode': guest['invitationCode'],
            'name': 'The Santos Family',
            'allocatedSeats': 4,
            'notes': 'Parents + 2 children',
        }}

    def test_lookup_errors(self, client):
        assert client.get('/api/guest').status_code == 400

        response = client.get('/api/guest', params={'id': 'NOPE0000'})
        assert response.status_code == 404
        assert response.json()['error'] == 'Invalid invitation ID'

    def test_explicit_code_conflict(self, client):
        add_guest(client, invitationCode='SANTOS01')

        response = client.post('/api/admin/guests', json={'name': 'Other', 'allocatedSeats': 1,
                                                          'invitationCode': 'SANTOS01'})

        assert response.status_code == 409

    def test_update_and_delete_guest(self, client):
        guest = add_guest(client)

        response = client.put('/api/admin/guests', json={
            'invitationCode': guest['invitationCode'], 'name': 'The Santos Clan', 'allocatedSeats': 5
        })
        assert response.status_code == 200
        assert response.json()['guest']['allocatedSeats'] == 5

        response = client.delete('/api/admin/guests', params={'id': guest['invitationCode']})
        assert response.json() == {'success': True}
        assert client.delete('/api/admin/guests', params={'id': guest['invitationCode']}).status_code == 404

    def test_update_without_seats_keeps_guest(self, client):
        guest = add_guest(client)

        response = client.put('/api/admin/guests', json={
            'invitationCode': guest['invitationCode'], 'name': 'The Santos Clan'
        })

        assert response.status_code == 422
        stored = client.get('/api/guest', params={'id': guest['invitationCode']}).json()['guest']
        assert stored['allocatedSeats'] == 4
        assert stored['name'] == 'The Santos Family'

    def test_update_requires_code(self, client):
        response = client.put('/api/admin/guests', json={'name': 'x', 'allocatedSeats': 1})

        assert response.status_code == 400
        assert response.json()['error'] == 'Invitation code is required'

    def test_rsvp_flow(self, client):
        guest = add_guest(client)
        code = guest['invitationCode']

        assert client.get('/api/rsvp/check', params={'invitationCode': code}).json() == {'hasRSVP': False}

        response = client.post('/api/rsvp', json={
            'name': 'Ana Santos', 'email': 'ana@example.com', 'willAttend': 'yes',
            'numberOfGuests': 3, 'invitationCode': code
        })
        assert response.status_code == 200
        assert response.json()['data']['willAttend'] == 'yes'

        check = client.get('/api/rsvp/check', params={'invitationCode': code}).json()
        assert check['hasRSVP'] is True
        assert check['rsvp']['numberOfGuests'] == 3

        stats = client.get('/api/admin/rsvps/stats').json()
        assert stats['attending'] == {'count': 1, 'totalGuests': 3}
        assert stats['notAttending'] == {'count': 0, 'totalGuests': 0}
        assert stats['totalInvitations'] == 1
        assert stats['totalSeats'] == 4

    @pytest.mark.parametrize('body', [
        {'name': 'Ana', 'willAttend': 'yes'},
        {'name': '', 'email': 'ana@example.com', 'willAttend': 'yes'},
        {'name': 'Ana', 'email': 'ana@example.com'},
    ])
    def test_rsvp_missing_fields(self, client, body):
        response = client.post('/api/rsvp', json=body)

        assert response.status_code == 400
        assert response.json()['error'] == 'Missing required fields'

    def test_rsvp_unknown_invitation(self, client):
        response = client.post('/api/rsvp', json={
            'name': 'Ana', 'email': 'ana@example.com', 'willAttend': 'no', 'invitationCode': 'NOPE0000'
        })

        assert response.status_code == 404

    def test_clear_and_export(self, client):
        client.post('/api/rsvp', json={'name': 'Ana', 'email': 'ana@example.com', 'willAttend': 'yes'})

        response = client.post('/api/admin/download')
        assert response.headers['content-type'] == XLSX_CONTENT_TYPE
        sheet = openpyxl.load_workbook(io.BytesIO(response.content)).active
        assert [cell.value for cell in sheet[1]] == RSVP_EXPORT_COLUMNS
        assert sheet.max_row == 2

        cleared = client.delete('/api/admin/rsvps').json()
        assert cleared['deletedCount'] == 1
        assert client.get('/api/admin/rsvps').json() == []


class TestContent:

    def test_schedule_crud(self, client):
        response = client.post('/api/admin/schedule', json={
            'eventName': 'Ceremony', 'eventTime': '15:00', 'location': 'Church', 'sortOrder': 1
        })
        assert response.status_code == 200
        event = response.json()['event']
        assert event['eventTime'] == '15:00:00'

        response = client.put('/api/admin/schedule', params={'id': event['id']}, json={'location': 'Cathedral'})
        assert response.json()['event']['location'] == 'Cathedral'
        assert response.json()['event']['eventName'] == 'Ceremony'

        listed = client.get('/api/schedule')
        assert listed.headers['cache-control'] == settings.PUBLIC_CACHE_CONTROL
        assert [e['location'] for e in listed.json()] == ['Cathedral']

        response = client.delete('/api/admin/schedule', params={'id': event['id']})
        assert response.json() == {'success': True, 'message': 'Wedding event deleted successfully'}

        response = client.delete('/api/admin/schedule', params={'id': event['id']})
        assert response.status_code == 404
        assert response.json()['error'] == 'Wedding event not found'

    def test_update_requires_id(self, client):
        response = client.put('/api/admin/locations', json={'name': 'Hall'})

        assert response.status_code == 400
        assert response.json()['error'] == 'Location ID is required'

    def test_entourage_side_checked(self, client):
        response = client.post('/api/admin/entourage', json={
            'name': 'Antonio', 'role': 'Father of the Bride', 'category': 'parents', 'side': 'male'
        })

        assert response.status_code == 422

    def test_entourage_partial_update_keeps_side_rule(self, client):
        member = client.post('/api/admin/entourage', json={
            'name': 'Josefina Igaya', 'role': 'Mother of the Bride', 'category': 'parents', 'side': 'bride'
        }).json()['member']

        response = client.put('/api/admin/entourage', params={'id': member['id']}, json={'side': 'male'})

        assert response.status_code == 400
        assert response.json()['error'] == 'For parents, side must be one of: bride, groom'
        assert client.get('/api/entourage').json()[0]['side'] == 'bride'

        response = client.put('/api/admin/entourage', params={'id': member['id']}, json={'side': 'groom'})
        assert response.status_code == 200
        assert response.json()['member']['side'] == 'groom'

    def test_entourage_category_change_checks_stored_side(self, client):
        member = client.post('/api/admin/entourage', json={
            'name': 'Ponciano Rivera', 'role': 'Principal Sponsor', 'category': 'sponsors', 'side': 'male'
        }).json()['member']

        response = client.put('/api/admin/entourage', params={'id': member['id']}, json={'category': 'parents'})
        assert response.status_code == 400

        response = client.put('/api/admin/entourage', params={'id': member['id']}, json={'category': 'other'})
        assert response.status_code == 200
        assert response.json()['member']['category'] == 'other'

    def test_entourage_update_unknown_member(self, client):
        response = client.put('/api/admin/entourage', params={'id': 9999}, json={'side': 'both'})

        assert response.status_code == 404
        assert response.json()['error'] == 'Entourage member not found'

    def test_attire_and_locations(self, client):
        client.post('/api/admin/attire', json={
            'category': 'Guests', 'title': 'Semi-formal', 'photos': ['https://img/a.jpg']
        })
        client.post('/api/admin/locations', json={'name': 'Church', 'address': 'Intramuros, Manila'})

        attire = client.get('/api/attire').json()
        locations = client.get('/api/locations').json()

        assert attire[0]['photos'] == ['https://img/a.jpg']
        assert locations[0]['address'] == 'Intramuros, Manila'

    def test_prenup_batch_and_update(self, client):
        response = client.post('/api/admin/prenup', json={'photos': [
            {'photoUrl': 'https://img/1.jpg'},
            {'photoUrl': 'https://img/2.jpg', 'sortOrder': 5},
            {'photoUrl': 'https://img/3.jpg'},
        ]})
        photos = response.json()['photos']
        assert [p['sortOrder'] for p in photos] == [0, 5, 2]

        response = client.put('/api/admin/prenup', json={'id': photos[1]['id'], 'caption': 'Sunset'})
        assert response.json()['photo']['caption'] == 'Sunset'

        gallery = client.get('/api/prenup').json()
        assert [p['photoUrl'] for p in gallery['photos']] == [
            'https://img/1.jpg', 'https://img/3.jpg', 'https://img/2.jpg'
        ]

    def test_prenup_single(self, client):
        response = client.post('/api/admin/prenup', json={'photoUrl': 'https://img/1.jpg'})

        assert response.json()['photo']['sortOrder'] == 0
        assert response.json()['photo']['caption'] == ''


class TestService:

    def test_health(self, client):
        body = client.get('/health').json()

        assert body['database'] == 'connected'
        assert body['status'] == 'healthy'

    def test_ping(self, client):
        assert client.get('/api/ping').json() == {'ping': 'pong'}

    def test_admin_api_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, 'ENABLE_API_KEY_AUTH', True)
        monkeypatch.setattr(settings, 'ADMIN_API_KEY', 'let-me-in')

        assert client.get('/api/admin/guests').status_code == 401
        assert client.get('/api/admin/guests', headers={'X-API-Key': 'wrong'}).status_code == 401
        assert client.get('/api/admin/guests', headers={'X-API-Key': 'let-me-in'}).status_code == 200
        # Public endpoints stay open
        assert client.get('/api/schedule').status_code == 200

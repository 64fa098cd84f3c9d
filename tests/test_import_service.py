"""
Tests for the import orchestration.

A fake repository stands in for the database so insert failures can be
triggered for a specific member.
"""

import random

import pytest

from services.exceptions import EmptyWorkbookError, ImportValidationError, SpreadsheetParseError
from services.import_service import ENTOURAGE_EMPTY_MESSAGE, GUEST_EMPTY_MESSAGE, ImportService


class FakeRepository:
    """In-memory stand-in for WeddingRepository."""

    def __init__(self, fail_on=(), existing_codes=()):
        self.fail_on = set(fail_on)
        self.codes = set(existing_codes)
        self.members = []

    def existing_invitation_codes(self):
        return set(self.codes)

    def create_entourage_member(self, data):
        if data['name'] in self.fail_on:
            raise RuntimeError('duplicate key value')
        member = dict(data, id=len(self.members) + 1)
        self.members.append(member)
        return member


class TestGuestImport:
    """Test guest workbook preparation."""

    def test_codes_assigned(self, guest_rows):
        result = ImportService(FakeRepository()).import_guest_rows(guest_rows)

        assert result['total_processed'] == 3
        codes = [guest['invitationCode'] for guest in result['guests']]
        assert len(set(codes)) == 3
        assert all(len(code) == 8 for code in codes)
        assert result['guests'][0]['allocatedSeats'] == 2
        assert result['guests'][0]['name'] == 'John & Jane Smith'

    def test_invalid_row_rejects_everything(self, guest_rows):
        guest_rows[1]['name'] = ''

        with pytest.raises(ImportValidationError) as exc_info:
            ImportService(FakeRepository()).import_guest_rows(guest_rows)

        assert exc_info.value.errors == ['Row 3: Name is required']
        assert exc_info.value.processed_count == 0
        assert exc_info.value.total_rows == 3

    def test_zero_seats_reported(self):
        with pytest.raises(ImportValidationError) as exc_info:
            ImportService(FakeRepository()).import_guest_rows([{'name': 'Jane Doe', 'allocatedSeats': 0}])

        assert exc_info.value.errors == ['Row 2: Allocated seats must be a number greater than 0']

    def test_stored_codes_avoided_when_enabled(self):
        class FirstCodeTaken(random.Random):
            """Yields 'TAKEN123' first, then 'FRESH456'."""
            chars = iter('TAKEN123FRESH456')

            def choice(self, seq):
                return next(self.chars)

        service = ImportService(
            FakeRepository(existing_codes={'TAKEN123'}),
            check_existing_codes=True,
            rng=FirstCodeTaken()
        )

        result = service.import_guest_rows([{'name': 'Ana', 'allocatedSeats': 1}])

        assert result['guests'][0]['invitationCode'] == 'FRESH456'

    def test_stored_codes_ignored_by_default(self):
        repository = FakeRepository(existing_codes={'TAKEN123'})
        repository.existing_invitation_codes = None  # must not be called

        result = ImportService(repository).import_guest_rows([{'name': 'Ana', 'allocatedSeats': 1}])

        assert result['total_processed'] == 1

    def test_empty_workbook(self, make_workbook):
        content = make_workbook(['name', 'allocatedSeats'], [])

        with pytest.raises(EmptyWorkbookError, match=GUEST_EMPTY_MESSAGE):
            ImportService(FakeRepository()).import_guest_workbook(content, 'guests.xlsx')

    def test_unreadable_workbook(self):
        with pytest.raises(SpreadsheetParseError):
            ImportService(FakeRepository()).import_guest_workbook(b'garbage', 'guests.xlsx')

    def test_progress_reported(self, guest_rows):
        stages = []
        service = ImportService(FakeRepository(), progress_callback=lambda stage, pct, msg: stages.append(stage))

        service.import_guest_rows(guest_rows)

        assert stages[-1] == 'complete'


class TestEntourageImport:
    """Test entourage import with per-member inserts."""

    def test_all_inserted(self, entourage_rows):
        repository = FakeRepository()

        result = ImportService(repository).import_entourage_rows(entourage_rows)

        assert result['inserted_count'] == 3
        assert result['total_processed'] == 3
        assert result['errors'] == []
        assert [m['name'] for m in repository.members] == [
            'Josefina Igaya', 'Ponciano Rivera', 'Rommel Columbano'
        ]

    def test_insert_failure_does_not_stop_import(self, entourage_rows):
        repository = FakeRepository(fail_on={'Ponciano Rivera'})

        result = ImportService(repository).import_entourage_rows(entourage_rows)

        assert result['inserted_count'] == 2
        assert result['total_processed'] == 3
        assert len(result['errors']) == 1
        assert result['errors'][0].startswith('Failed to insert Ponciano Rivera:')
        assert [m['name'] for m in result['members']] == ['Josefina Igaya', 'Rommel Columbano']

    def test_validation_errors_insert_nothing(self, entourage_rows):
        entourage_rows[0]['side'] = 'male'
        repository = FakeRepository()

        with pytest.raises(ImportValidationError) as exc_info:
            ImportService(repository).import_entourage_rows(entourage_rows)

        assert exc_info.value.errors == ['Row 2: For parents, side must be "bride" or "groom"']
        assert exc_info.value.processed_count == 2
        assert exc_info.value.total_rows == 3
        assert repository.members == []

    def test_empty_workbook(self, make_workbook):
        content = make_workbook(['name', 'role', 'side'], [])

        with pytest.raises(EmptyWorkbookError, match=ENTOURAGE_EMPTY_MESSAGE):
            ImportService(FakeRepository()).import_entourage_workbook(content, 'entourage.xlsx')

    def test_workbook_import(self, make_workbook):
        content = make_workbook(
            ['name', 'role', 'category', 'side', 'description', 'sortOrder'],
            [['Rommel Columbano', 'Best Man', 'other', 'both', None, 1]]
        )

        result = ImportService(FakeRepository()).import_entourage_workbook(content, 'entourage.xlsx')

        assert result['inserted_count'] == 1
        assert result['members'][0]['description'] == ''

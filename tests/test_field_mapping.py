"""
Tests for snake_case / camelCase key mapping.
"""

from services.field_mapping import camel_to_snake, snake_to_camel, to_camel_keys, to_snake_keys


def test_names_convert_both_ways():
    assert snake_to_camel('allocated_seats') == 'allocatedSeats'
    assert snake_to_camel('name') == 'name'
    assert camel_to_snake('invitationCode') == 'invitation_code'
    assert camel_to_snake('mapUrl') == 'map_url'


def test_guest_draft_keys_map_to_columns():
    draft = {'invitationCode': 'ABCD1234', 'name': 'Ana Cruz', 'allocatedSeats': 2, 'email': None}

    assert to_snake_keys(draft) == {
        'invitation_code': 'ABCD1234', 'name': 'Ana Cruz', 'allocated_seats': 2, 'email': None
    }
    assert to_camel_keys(to_snake_keys(draft)) == draft

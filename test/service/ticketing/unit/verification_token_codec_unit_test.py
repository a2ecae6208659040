from urllib.parse import quote

import orjson
import pytest

from src.service.ticketing.domain.value_object.verification_token import VerificationToken
from src.service.ticketing.domain.verification_token_codec import (
    build_verification_url,
    decode_verification_data,
    encode_token,
    encode_uri_component,
    parse_verification_url,
)


ORIGIN = 'https://tickets.example.com'


@pytest.fixture
def token() -> VerificationToken:
    return VerificationToken(
        ticket_id='t1',
        event_id='e1',
        user_id='u1',
        code='ABC',
        verification_code='XYZ123',
        timestamp=1700000000000,
    )


@pytest.mark.unit
class TestEncode:
    def test_compact_json_in_wire_order(self, token: VerificationToken) -> None:
        assert encode_token(token) == (
            '{"ticketId":"t1","eventId":"e1","userId":"u1","code":"ABC",'
            '"verificationCode":"XYZ123","timestamp":1700000000000}'
        )

    def test_url_points_at_verify_page(self, token: VerificationToken) -> None:
        url = build_verification_url(token, f'{ORIGIN}/')

        assert url.startswith(f'{ORIGIN}/verify-ticket?data=%7B%22ticketId%22%3A%22t1%22')
        assert '{' not in url and '"' not in url

    def test_encode_uri_component_keeps_js_safe_set(self) -> None:
        assert encode_uri_component("a b!*'()~-_.") == "a%20b!*'()~-_."
        assert encode_uri_component('/?&=') == '%2F%3F%26%3D'


@pytest.mark.unit
class TestDecode:
    def test_url_round_trip(self, token: VerificationToken) -> None:
        assert parse_verification_url(build_verification_url(token, ORIGIN)) == token

    def test_accepts_once_decoded_value(self, token: VerificationToken) -> None:
        assert decode_verification_data(encode_token(token)) == token

    def test_accepts_percent_encoded_value(self, token: VerificationToken) -> None:
        assert decode_verification_data(quote(encode_token(token), safe='')) == token

    def test_missing_timestamp_defaults_to_zero(self) -> None:
        data = orjson.dumps(
            {'ticketId': 't1', 'eventId': 'e1', 'userId': 'u1', 'verificationCode': 'X'}
        ).decode()

        decoded = decode_verification_data(data)

        assert decoded is not None
        assert decoded.timestamp == 0
        assert decoded.code == ''

    def test_numeric_identifiers_are_accepted(self) -> None:
        data = orjson.dumps(
            {'ticketId': 1, 'eventId': 2, 'userId': 3, 'verificationCode': 'X', 'timestamp': '5'}
        ).decode()

        decoded = decode_verification_data(data)

        assert decoded is not None
        assert (decoded.ticket_id, decoded.event_id, decoded.timestamp) == ('1', '2', 5)

    @pytest.mark.parametrize(
        'data',
        [
            None,
            '',
            'not-json',
            '%7Bbroken',
            '%E0%A4%A',
            '[1, 2, 3]',
            '"just a string"',
            '{"ticketId":"t1","eventId":"e1","userId":"u1"}',
            '{"ticketId":"t1","eventId":"e1","userId":"u1","verificationCode":""}',
            '{"ticketId":"t1","eventId":"e1","userId":true,"verificationCode":"X"}',
            '{"ticketId":"t1","eventId":"e1","userId":"u1","verificationCode":"X","timestamp":"soon"}',
        ],
    )
    def test_malformed_data_decodes_to_none(self, data: str | None) -> None:
        assert decode_verification_data(data) is None

    def test_url_without_data_param(self) -> None:
        assert parse_verification_url(f'{ORIGIN}/verify-ticket') is None
        assert parse_verification_url(f'{ORIGIN}/verify-ticket?data=') is None

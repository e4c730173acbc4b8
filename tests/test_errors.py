import pytest

from supertokens_client.domain.status import Outcome
from supertokens_client.errors import (
    AddRoleError,
    AddRoleErrorKind,
    ApiVersionError,
    CreateJwtError,
    CreateJwtErrorKind,
    JwksError,
    JwksErrorKind,
    SignInError,
    SignInErrorKind,
)

ALL = [SignInError, CreateJwtError, JwksError, AddRoleError, ApiVersionError]


@pytest.mark.parametrize("error_cls", ALL)
def test_every_taxonomy_has_unknown(error_cls):
    assert error_cls.kinds["unknown"].value == "unknown"
    assert error_cls.from_outcome(Outcome.unknown).kind.value == "unknown"


def test_not_ok_maps_per_operation():
    assert SignInError.from_outcome(Outcome.not_ok).kind is SignInErrorKind.wrong_credentials
    assert (
        CreateJwtError.from_outcome(Outcome.not_ok).kind
        is CreateJwtErrorKind.unsupported_algorithm
    )
    assert AddRoleError.from_outcome(Outcome.not_ok).kind is AddRoleErrorKind.unknown_role


def test_token_issuance_has_no_invalid_api_key_kind():
    err = CreateJwtError.from_outcome(Outcome.invalid_api_key, status_code=401)
    assert err.kind is CreateJwtErrorKind.unknown
    assert err.status_code == 401


def test_role_404_is_user_not_found():
    assert AddRoleError.from_outcome(Outcome.not_found).kind is AddRoleErrorKind.user_not_found


def test_key_retrieval_only_knows_internal():
    assert JwksError.from_outcome(Outcome.internal).kind is JwksErrorKind.internal
    assert JwksError.from_outcome(Outcome.not_found).kind is JwksErrorKind.unknown


def test_bad_request_message_is_kept():
    err = SignInError.from_outcome(Outcome.bad_request, "Field name 'email' is invalid")
    assert err.kind is SignInErrorKind.bad_request
    assert err.message == "Field name 'email' is invalid"
    assert str(err) == "Field name 'email' is invalid"

"""Tests for IdentifyMessage and its builder."""

import pytest
from pydantic import ValidationError

from beacon.messages.errors import MessageStateError
from beacon.messages.errors import NullArgumentError
from beacon.messages.identify import IdentifyMessage
from beacon.messages.primitives import MessageType


def test_traits_rejects_none() -> None:
    with pytest.raises(NullArgumentError) as exc_info:
        IdentifyMessage.builder().traits(None)  # type: ignore[arg-type]
    assert str(exc_info.value) == "Null traits"


def test_build_without_user_or_traits_raises_state_error() -> None:
    with pytest.raises(MessageStateError) as exc_info:
        IdentifyMessage.builder().build()
    assert str(exc_info.value) == "Either userId or traits must be provided."


def test_build_with_anonymous_id_and_empty_traits_raises_state_error() -> None:
    """Empty traits do not count as identifying anything."""
    with pytest.raises(MessageStateError, match="Either userId or traits must be provided"):
        IdentifyMessage.builder().anonymous_id("anon-1").traits({}).build()


def test_build_with_user_id_only_succeeds() -> None:
    message = IdentifyMessage.builder().user_id("foo").build()

    assert message.type == MessageType.IDENTIFY
    assert message.user_id == "foo"
    assert message.traits is None


def test_build_with_anonymous_id_and_traits_succeeds() -> None:
    message = IdentifyMessage.builder().anonymous_id("anon-1").traits({"email": "a@example.com"}).build()

    assert message.anonymous_id == "anon-1"
    assert message.traits == {"email": "a@example.com"}


def test_build_with_traits_but_no_ids_raises_identity_error() -> None:
    with pytest.raises(MessageStateError, match="Either anonymousId or userId must be provided"):
        IdentifyMessage.builder().traits({"email": "a@example.com"}).build()


def test_direct_construction_checks_user_or_traits() -> None:
    with pytest.raises(ValidationError, match="Either userId or traits must be provided"):
        IdentifyMessage(anonymous_id="anon-1")  # type: ignore[arg-type]

# tests/test_request_builder.py
import pytest

from sitebuilder.core.errors import InvalidInput
from sitebuilder.services.generation_types import GenerationOptions
from sitebuilder.services.prompt_service import (
    FULL_STACK_SYSTEM_PROMPT,
    MARKUP_ONLY_SYSTEM_PROMPT,
    build_messages,
)
from sitebuilder.services.request_builder import build_request


@pytest.mark.parametrize("prompt", ["", "   ", "\n\t  "])
def test_blank_prompt_rejected(prompt):
    with pytest.raises(InvalidInput):
        build_request(prompt)


def test_flags_pass_through_and_prompt_is_verbatim():
    opts = GenerationOptions(include_backend=True, has_images=True, has_files=True)
    req = build_request("  A bakery site  ", opts)
    assert req.prompt == "  A bakery site  "
    assert req.include_backend is True
    assert req.has_images is True
    assert req.has_videos is False
    assert req.has_files is True


def test_default_options():
    req = build_request("A bakery site")
    assert req.include_backend is False
    assert not (req.has_images or req.has_videos or req.has_files)


def test_messages_pick_template_by_backend_flag():
    plain = build_messages(build_request("A bakery site"))
    full = build_messages(build_request("A todo app", GenerationOptions(include_backend=True)))

    assert [m["role"] for m in plain] == ["system", "user"]
    assert plain[0]["content"] == MARKUP_ONLY_SYSTEM_PROMPT
    assert plain[1]["content"] == "A bakery site"
    assert full[0]["content"] == FULL_STACK_SYSTEM_PROMPT
    assert '"html"' in full[0]["content"]
    assert '"edgeFunctions"' in full[0]["content"]


def test_media_flags_do_not_change_system_prompt():
    a = build_messages(build_request("x", GenerationOptions(has_images=True, has_videos=True)))
    b = build_messages(build_request("x"))
    assert a == b

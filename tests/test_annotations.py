import pytest

from apexe.annotations import ModuleAnnotations, infer
from apexe.models import HelpFormat, ScannedCommand, ScannedFlag, ValueType


def make_command(name, flags=()):
    return ScannedCommand(
        name=name,
        full_command=f"tool {name}",
        help_format=HelpFormat.GNU,
        flags=[
            ScannedFlag(
                long_name=long or None,
                short_name=short or None,
                value_type=ValueType.BOOLEAN,
            )
            for long, short in flags
        ],
    )


def test_list_is_readonly():
    ann = infer(make_command("list"))
    assert ann.readonly is True
    assert ann.destructive is False


def test_delete_is_destructive():
    ann = infer(make_command("delete"))
    assert ann.destructive is True
    assert ann.requires_approval is True
    assert ann.readonly is False


def test_create_is_write():
    ann = infer(make_command("create"))
    assert ann.readonly is False
    assert ann.destructive is False


def test_get_is_idempotent():
    assert infer(make_command("get")).idempotent is True


def test_readonly_is_cacheable():
    ann = infer(make_command("status"))
    assert ann.readonly is True
    assert ann.idempotent is True
    assert ann.cacheable is True


def test_unknown_defaults():
    ann = infer(make_command("xyzzy"))
    assert ann.readonly is False
    assert ann.destructive is False
    assert ann.idempotent is False
    assert ann.cacheable is False
    assert ann.requires_approval is False
    assert ann.open_world is True
    assert ann.pagination_style == "cursor"


def test_name_match_is_case_insensitive():
    ann = infer(make_command("LIST"))
    assert ann.readonly is True


def test_readonly_but_not_idempotent_is_not_cacheable():
    ann = infer(make_command("cat"))
    assert ann.readonly is True
    assert ann.cacheable is False


def test_force_flag_requires_approval():
    ann = infer(make_command("push", [("--force", "-f")]))
    assert ann.requires_approval is True
    assert ann.destructive is False


@pytest.mark.parametrize("short", ["-y", "-r", "-f"])
def test_short_approval_flags(short):
    assert infer(make_command("apply", [("", short)])).requires_approval is True


def test_dry_run_flag_is_idempotent():
    assert infer(make_command("apply", [("--dry-run", "")])).idempotent is True


def test_combined_flags():
    ann = infer(make_command("deploy", [("--force", ""), ("--dry-run", "")]))
    assert ann.requires_approval is True
    assert ann.idempotent is True


def test_annotations_dict_round_trip():
    ann = infer(make_command("status", [("--check", "")]))
    data = ann.to_dict()
    assert data["readonly"] is True
    assert data["cache_ttl"] == 0
    assert ModuleAnnotations.from_dict(data) == ann


def test_from_dict_fills_missing_with_defaults():
    ann = ModuleAnnotations.from_dict({"readonly": True, "unrelated": 1})
    assert ann.readonly is True
    assert ann.open_world is True
    assert ann.destructive is False
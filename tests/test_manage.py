import json

import manage


async def test_sources_add_list_remove(settings, capsys):
    assert await manage.main(["sources", "add", "555"], settings=settings) == 0
    assert json.loads(settings.sources_file_path.read_text()) == ["100", "200", "555"]

    assert await manage.main(["sources", "list"], settings=settings) == 0
    out = capsys.readouterr().out
    assert "3. 555" in out

    assert await manage.main(["sources", "remove", "100"], settings=settings) == 0
    assert json.loads(settings.sources_file_path.read_text()) == ["200", "555"]


async def test_sources_errors_return_non_zero(settings, capsys):
    assert await manage.main(["sources", "add", "100"], settings=settings) == 1
    assert await manage.main(["sources", "remove", "404"], settings=settings) == 1
    assert await manage.main(["sources"], settings=settings) == 1


async def test_config_check_masks_secrets(settings, capsys):
    assert await manage.main(["config", "check"], settings=settings) == 0

    out = capsys.readouterr().out
    assert "0123************" in out
    assert "0123456789abcdef" not in out
    assert "Initial sources: 100, 200" in out


async def test_no_command_prints_help(capsys):
    assert await manage.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_mask():
    assert manage.mask("abc") == "***"
    assert manage.mask("abcdefgh") == "abcd****"

import pytest
from rich.console import Console

from wdsession.cli import apply_arguments, build_parser, main
from wdsession.config.settings import SessionSettings
from wdsession.utils.console import ConnectReporter, describe_browser


def test_arguments_override_settings():
    args = build_parser().parse_args(['--host', 'grid', '--port', '9515', '--browser', 'chrome', '--headless'])
    settings = apply_arguments(SessionSettings(), args)

    assert args.headless is True
    assert settings.webdriver.host == 'grid'
    assert settings.webdriver.port == 9515
    assert settings.desired_capabilities == {'browserName': 'chrome'}


def test_disabled_session_start_exits_cleanly(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('WDSESSION_START_SESSION', '0')
    assert main(['--config', str(tmp_path / 'missing.yml')]) == 0


@pytest.mark.parametrize('capabilities, expected', [
    ({'browserName': 'chrome', 'version': '120.0', 'platform': 'LINUX'},
     'chrome (120.0) on LINUX platform.'),
    ({'browserName': 'firefox', 'browserVersion': '121.0', 'platformName': 'mac', 'platformVersion': '14'},
     'firefox (121.0) on mac 14 platform.'),
])
def test_describe_browser(capabilities, expected):
    assert describe_browser(capabilities) == expected


def test_reporter_prints_connection_summary():
    console = Console(record=True, width=120)
    reporter = ConnectReporter('localhost', 4444, console=console)

    reporter.start()
    reporter.connected({'browserName': 'chrome', 'version': '120.0', 'platform': 'LINUX'}, 42)

    output = console.export_text()
    assert 'Connected to localhost on port 4444 (42ms).' in output
    assert 'Using: chrome (120.0) on LINUX platform.' in output


def test_disabled_reporter_prints_nothing():
    console = Console(record=True)
    reporter = ConnectReporter('localhost', 4444, enabled=False, console=console)
    reporter.start()
    reporter.failed()
    assert console.export_text() == ''

import pytest
import rephraser.main as main_mod

def test_main_success(monkeypatch):
    """Test that main() calls cli_main and exits with code 0 on success."""
    calls = []
    monkeypatch.setattr(main_mod, 'cli_main', lambda: calls.append('cli_main_called'))
    monkeypatch.setattr(main_mod.sys, 'exit', lambda code=0: calls.append(f'exit_{code}'))
    monkeypatch.setattr(main_mod, 'console', type('C', (), {'print': lambda *args, **kwargs: calls.append(('print', args))}))
    main_mod.main()
    assert calls == ['cli_main_called', 'exit_0']

def test_main_exception(monkeypatch):
    """Test that main() reports unexpected errors and exits with code 1."""
    def bad_main():
        raise RuntimeError('failure in cli')
    monkeypatch.setattr(main_mod, 'cli_main', bad_main)
    printed = []
    def fake_print(msg): printed.append(msg)
    monkeypatch.setattr(main_mod, 'console', type('C', (), {'print': staticmethod(fake_print)}))
    monkeypatch.setattr(main_mod.sys, 'exit', lambda code=1: printed.append(f'exit_{code}'))
    main_mod.main()
    assert any('unexpected error occurred' in str(m).lower() for m in printed)
    assert any('failure in cli' in str(m) for m in printed)
    assert 'exit_1' in printed

def test_cli_exit_code_passes_through(monkeypatch):
    """SystemExit raised by the CLI is not treated as an unexpected error."""
    def failing_cli():
        raise SystemExit(1)
    monkeypatch.setattr(main_mod, 'cli_main', failing_cli)
    with pytest.raises(SystemExit) as exc:
        main_mod.main()
    assert exc.value.code == 1

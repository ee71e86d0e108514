from prtg import main as main_mod


def test_main_entrypoint_no_args(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.argv", ["prtg"])
    monkeypatch.chdir(tmp_path)
    rc = main_mod.main()
    assert isinstance(rc, int)

from byedroid.config import load_merged_config
from byedroid.scaffold import run_init

GRADLE = """
android {
    defaultConfig { applicationId "com.example.app" }
    productFlavors {
        dev {
            applicationIdSuffix ".dev"
        }
    }
}
"""


def _make_project(root):
    (root / "app").mkdir()
    (root / "app" / "build.gradle").write_text(GRADLE)


def test_run_init_writes_inferred_config(tmp_path):
    _make_project(tmp_path)
    cfg = run_init(tmp_path)
    loaded = load_merged_config(tmp_path).project
    assert loaded == cfg
    assert loaded.packages == ["com.example.app", "com.example.app.dev"]
    assert loaded.assemble_task == "assembleDevDebug"
    assert loaded.install_task == "installDevDebug"
    assert loaded.variant == "DevDebug"
    assert loaded.log_level == "D,I,W,E,V"


def test_run_init_reports_what_it_wrote(tmp_path, capsys):
    _make_project(tmp_path)
    run_init(tmp_path)
    out = capsys.readouterr().out
    assert f"Wrote .byedroid.toml in {tmp_path}" in out
    assert '  assemble_task = "assembleDevDebug"' in out
    assert '  install_task  = "installDevDebug"' in out
    assert '"com.example.app.dev"' in out


def test_run_init_without_app_module(tmp_path, capsys):
    cfg = run_init(tmp_path)
    assert (tmp_path / ".byedroid.toml").is_file()
    assert cfg.packages is None
    assert cfg.assemble_task is None
    assert cfg.variant == "no app/build.gradle"
    out = capsys.readouterr().out
    assert "assemble_task" not in out
    assert load_merged_config(tmp_path).project == cfg


def test_run_init_overwrites_existing_config(tmp_path):
    _make_project(tmp_path)
    (tmp_path / ".byedroid.toml").write_text('package = "com.example.old"\n')
    run_init(tmp_path)
    loaded = load_merged_config(tmp_path).project
    assert loaded.package is None
    assert loaded.assemble_task == "assembleDevDebug"
from appgen.utils import fileutils


def test_materialize_creates_parent_directories(tmp_path):
    operation = fileutils.materialize_file(tmp_path, "templates/partials/nav.html", "<nav></nav>")

    path = tmp_path / "templates" / "partials" / "nav.html"
    assert operation.message == f"Created/Updated file: {path}"
    assert operation.path == path
    assert operation.directory_error is None
    assert path.read_text(encoding="utf-8") == "<nav></nav>"


def test_materialize_overwrites_existing_content(tmp_path):
    (tmp_path / "app.py").write_text("old content that is much longer", encoding="utf-8")

    fileutils.materialize_file(tmp_path, "app.py", "new")

    assert (tmp_path / "app.py").read_text(encoding="utf-8") == "new"


def test_materialize_same_content_twice_is_idempotent(tmp_path):
    first = fileutils.materialize_file(tmp_path, "static/style.css", "body {}")
    listing = sorted(p.relative_to(tmp_path) for p in tmp_path.rglob("*"))
    second = fileutils.materialize_file(tmp_path, "static/style.css", "body {}")

    assert first.message == second.message
    assert sorted(p.relative_to(tmp_path) for p in tmp_path.rglob("*")) == listing
    assert (tmp_path / "static" / "style.css").read_text(encoding="utf-8") == "body {}"


def test_materialize_reports_write_errors(tmp_path):
    (tmp_path / "app.py").mkdir()

    operation = fileutils.materialize_file(tmp_path, "app.py", "print(1)")

    assert operation.message.startswith(f"Error creating/updating file {tmp_path / 'app.py'}: ")
    assert operation.directory_error is None


def test_materialize_reports_parent_errors(tmp_path):
    (tmp_path / "templates").write_text("a file, not a directory", encoding="utf-8")

    operation = fileutils.materialize_file(tmp_path, "templates/index.html", "<html></html>")

    assert operation.message.startswith("Error creating/updating file ")
    assert operation.directory_error
    assert operation.path.parent == tmp_path / "templates"


def test_materialize_refuses_paths_outside_root(tmp_path):
    root = tmp_path / "app"
    root.mkdir()

    operation = fileutils.materialize_file(root, "../evil.txt", "nope")

    assert operation.message.startswith("Error creating/updating file ")
    assert not (tmp_path / "evil.txt").exists()


def test_ensure_parent_dir(tmp_path):
    target = tmp_path / "a" / "b" / "c.txt"
    assert fileutils.ensure_parent_dir(target) is None
    assert (tmp_path / "a" / "b").is_dir()


def test_ensure_parent_dir_reports_errors(tmp_path):
    (tmp_path / "a").write_text("x", encoding="utf-8")
    assert fileutils.ensure_parent_dir(tmp_path / "a" / "b.txt")


def test_ensure_app_dir(tmp_path):
    assert fileutils.ensure_app_dir(tmp_path / "flask_app") is None
    assert (tmp_path / "flask_app").is_dir()
    # Existing directory is fine
    assert fileutils.ensure_app_dir(tmp_path / "flask_app") is None


def test_ensure_app_dir_reports_errors(tmp_path):
    (tmp_path / "blocker").write_text("x", encoding="utf-8")
    assert fileutils.ensure_app_dir(tmp_path / "blocker" / "flask_app")


def test_list_directory_sorts_dirs_first_and_skips_hidden(tmp_path):
    (tmp_path / "b.css").write_text("", encoding="utf-8")
    (tmp_path / "a.js").write_text("", encoding="utf-8")
    (tmp_path / ".env").write_text("", encoding="utf-8")
    (tmp_path / "z").mkdir()

    assert fileutils.list_directory(tmp_path) == [("z", True), ("a.js", False), ("b.css", False)]


def test_list_directory_missing_or_outside_root(tmp_path):
    root = tmp_path / "static"
    root.mkdir()
    (root / "file.txt").write_text("", encoding="utf-8")

    assert fileutils.list_directory(root, "missing") is None
    assert fileutils.list_directory(root, "file.txt") is None
    assert fileutils.list_directory(root, "..") is None

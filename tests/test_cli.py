import shutil


def test_folders_check_passes_when_in_sync(runner, make_folder):
    make_folder("Alpha")

    res = runner.invoke(args=["folders", "check"])

    assert res.exit_code == 0
    assert "All folders match storage." in res.output


def test_folders_check_reports_missing_directories(runner, make_folder, storage):
    parent = make_folder("Alpha")
    make_folder("Beta", parent=parent)
    shutil.rmtree(storage.root / "alpha" / "beta")

    res = runner.invoke(args=["folders", "check"])

    assert res.exit_code == 1
    assert "path=alpha/beta" in res.output
    assert "path=alpha\n" not in res.output


def test_folders_tree(runner, make_folder):
    parent = make_folder("Projects")
    make_folder("Client B", parent=parent)
    make_folder("Client A", parent=parent)

    res = runner.invoke(args=["folders", "tree"])

    assert res.exit_code == 0
    assert res.output.splitlines() == [
        "Projects (projects)",
        "  Client A (projects/client-a)",
        "  Client B (projects/client-b)",
    ]


def test_folders_tree_empty(runner):
    res = runner.invoke(args=["folders", "tree"])
    assert res.exit_code == 0
    assert "No folders." in res.output


def test_init_db(runner):
    res = runner.invoke(args=["init-db"])
    assert res.exit_code == 0
    assert "Database ready." in res.output

import json
import time
import pytest
from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)
from parley.resources.library import ScriptLibrary
from parley.resources.watcher import ScriptEventHandler, ScriptWatcher

@pytest.fixture
def library(tmp_path):
    with open(tmp_path / "keeper.json", "w") as f:
        json.dump({"entry": ["Halt!"]}, f)
    library = ScriptLibrary(tmp_path)
    library.load_all()
    return library

def write_script(path, lines):
    with open(path, "w") as f:
        json.dump({"entry": lines}, f)

def test_created_script_is_loaded(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=0)
    path = tmp_path / "fisher.json"
    write_script(path, ["No fish."])

    handler.on_created(FileCreatedEvent(str(path)))

    assert library.get("fisher") == {"entry": ["No fish."]}

def test_modified_script_is_reloaded(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=0)
    path = tmp_path / "keeper.json"
    write_script(path, ["Who goes there?"])

    handler.on_modified(FileModifiedEvent(str(path)))

    assert library.get("keeper") == {"entry": ["Who goes there?"]}

def test_rapid_changes_load_the_last_write(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=60)
    path = tmp_path / "keeper.json"

    write_script(path, ["First."])
    handler.on_modified(FileModifiedEvent(str(path)))
    write_script(path, ["Second."])
    handler.on_modified(FileModifiedEvent(str(path)))

    # Nothing is read while the file is still changing
    assert library.get("keeper") == {"entry": ["Halt!"]}
    assert handler.pending == [str(path)]

    handler.flush()

    assert library.get("keeper") == {"entry": ["Second."]}
    assert handler.pending == []

def test_truncate_then_write_is_loaded(library, tmp_path, caplog):
    handler = ScriptEventHandler(library, debounce_seconds=60)
    path = tmp_path / "npc.json"

    path.write_text("")
    handler.on_modified(FileModifiedEvent(str(path)))
    write_script(path, ["Hi"])
    handler.on_modified(FileModifiedEvent(str(path)))
    handler.flush()

    assert library.get("npc") == {"entry": ["Hi"]}
    assert "Failed to load" not in caplog.text

def test_reload_runs_after_quiet_period(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=0.05)
    path = tmp_path / "keeper.json"

    path.write_text("")
    handler.on_modified(FileModifiedEvent(str(path)))
    write_script(path, ["Later."])
    handler.on_modified(FileModifiedEvent(str(path)))

    deadline = time.monotonic() + 5
    while library.get("keeper") != {"entry": ["Later."]} and time.monotonic() < deadline:
        time.sleep(0.01)

    assert library.get("keeper") == {"entry": ["Later."]}

def test_delete_cancels_pending_reload(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=60)
    path = tmp_path / "keeper.json"

    write_script(path, ["Changed."])
    handler.on_modified(FileModifiedEvent(str(path)))
    path.unlink()
    handler.on_deleted(FileDeletedEvent(str(path)))

    assert handler.pending == []
    assert "keeper" not in library

def test_cancel_all(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=60)
    path = tmp_path / "keeper.json"
    write_script(path, ["Changed."])
    handler.on_modified(FileModifiedEvent(str(path)))

    handler.cancel_all()
    handler.flush()

    assert library.get("keeper") == {"entry": ["Halt!"]}

def test_deleted_script_is_discarded(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=0)
    path = tmp_path / "keeper.json"
    path.unlink()

    handler.on_deleted(FileDeletedEvent(str(path)))

    assert "keeper" not in library

def test_moved_script(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=0)
    old = tmp_path / "keeper.json"
    new = tmp_path / "guard.json"
    old.rename(new)

    handler.on_moved(FileMovedEvent(str(old), str(new)))

    assert "keeper" not in library
    assert library.get("guard") == {"entry": ["Halt!"]}

@pytest.mark.parametrize("name", ["notes.txt", ".keeper.json", "keeper.json~", "~keeper.json"])
def test_ignored_files(library, tmp_path, name):
    handler = ScriptEventHandler(library, debounce_seconds=0)
    path = tmp_path / name
    write_script(path, ["Ignored."])

    handler.on_created(FileCreatedEvent(str(path)))

    assert library.ids() == ["keeper"]

def test_directories_are_ignored(library, tmp_path):
    handler = ScriptEventHandler(library, debounce_seconds=0)
    (tmp_path / "sub.json").mkdir()

    handler.on_created(DirCreatedEvent(str(tmp_path / "sub.json")))

    assert library.ids() == ["keeper"]

def test_watcher_start_stop(library):
    watcher = ScriptWatcher(library)

    with watcher:
        assert watcher.is_running
    assert not watcher.is_running

def test_watcher_missing_directory(tmp_path):
    watcher = ScriptWatcher(ScriptLibrary(tmp_path / "nowhere"))

    assert not watcher.start()
    assert not watcher.is_running

import pytest

from conftest import make_song, server_error


def test_non_mp3_file_never_reaches_network(qtbot, orchestrator, client, notifications):
    assert orchestrator.submit_file("/tmp/chucknorris.png") is False

    assert client.calls == []
    assert orchestrator.job is None
    assert notifications.current.text == "Please upload an MP3 file"
    assert notifications.current.severity == "error"


@pytest.mark.parametrize("url", ["invalid-url", "https://example.com/video"])
def test_invalid_url_never_reaches_network(qtbot, orchestrator, client, notifications, url):
    assert orchestrator.submit_url(url) is False

    assert client.calls == []
    assert orchestrator.job is None
    assert notifications.current.text == "Please enter a valid YouTube URL"


def test_blank_url_is_rejected(qtbot, orchestrator, client, notifications):
    assert orchestrator.submit_url("   ") is False
    assert client.calls == []
    assert notifications.current.text == "Please enter a YouTube URL"


def test_upload_success_appends_song(qtbot, orchestrator, client, catalog, notifications, pool):
    catalog.reset([make_song("1", "Existing")])
    client.results["upload_file"] = make_song("2", "New Song")
    progress = []
    orchestrator.progress_changed.connect(lambda p, m: progress.append(p))

    assert orchestrator.submit_file("/music/New Song.mp3")
    assert orchestrator.busy
    assert orchestrator.job.label == "New Song.mp3"

    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)

    assert [s.id for s in catalog.list()] == ["1", "2"]
    assert notifications.current.text == "Song uploaded and processed successfully!"
    assert notifications.current.severity == "success"
    assert client.called("upload_file") == [("/music/New Song.mp3",)]
    assert 100 in progress
    assert progress[-1] == 0
    assert orchestrator.progress == 0
    assert max(progress) <= 100


def test_upload_failure_uses_server_message(qtbot, orchestrator, client, catalog, notifications):
    catalog.reset([make_song("1")])
    client.results["upload_file"] = server_error("Failed to process audio")

    orchestrator.submit_file("song.mp3")
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)

    assert [s.id for s in catalog.list()] == ["1"]
    assert notifications.current.text == "Failed to process audio"
    assert notifications.current.severity == "error"


def test_upload_failure_falls_back_to_generic_message(qtbot, orchestrator, client, catalog, notifications):
    client.results["upload_file"] = OSError("disk gone")

    orchestrator.submit_file("song.mp3")
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)

    assert catalog.list() == []
    assert notifications.current.text == "Upload failed"
    assert orchestrator.progress == 0


def test_url_success_clears_field_and_appends(qtbot, orchestrator, client, catalog, notifications):
    client.results["submit_youtube"] = make_song("yt", "Some Video")

    with qtbot.waitSignal(orchestrator.url_accepted, timeout=3000):
        assert orchestrator.submit_url("  https://www.youtube.com/watch?v=dQw4w9WgXcQ ")

    assert orchestrator.job is None
    assert client.called("submit_youtube") == [("https://www.youtube.com/watch?v=dQw4w9WgXcQ",)]
    assert [s.id for s in catalog.list()] == ["yt"]
    assert notifications.current.text == "YouTube video processed successfully!"


def test_url_failure_keeps_field(qtbot, orchestrator, client, notifications):
    client.results["submit_youtube"] = server_error(None)
    accepted = []
    orchestrator.url_accepted.connect(lambda: accepted.append(True))

    orchestrator.submit_url("https://youtu.be/dQw4w9WgXcQ")
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)

    assert accepted == []
    assert notifications.current.text == "Failed to process YouTube video"


def test_second_submission_refused_while_busy(qtbot, orchestrator, client, notifications):
    gate = client.hold()
    client.results["upload_file"] = make_song("2")

    assert orchestrator.submit_file("one.mp3")
    assert orchestrator.submit_file("two.mp3") is False
    assert orchestrator.submit_url("https://youtu.be/dQw4w9WgXcQ") is False

    gate.set()
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)
    assert len(client.calls) == 1


def test_simulated_progress_advances_while_request_is_outstanding(qtbot, orchestrator, client):
    gate = client.hold()
    client.results["submit_youtube"] = make_song("yt")
    phases = []
    orchestrator.progress_changed.connect(lambda p, m: phases.append((p, m)))

    orchestrator.submit_url("https://youtu.be/dQw4w9WgXcQ")
    qtbot.waitUntil(lambda: orchestrator.progress == 95, timeout=3000)
    assert orchestrator.busy
    assert orchestrator.phase_message == "Finalizing..."
    assert phases[0] == (0, "Fetching video info...")
    assert (60, "Removing drums...") in phases
    assert [p for p, _ in phases] == sorted(p for p, _ in phases)

    gate.set()
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)


def test_simulator_cannot_write_after_completion(qtbot, orchestrator, client):
    gate = client.hold()
    client.results["upload_file"] = make_song("2")
    updates = []

    orchestrator.submit_file("song.mp3")
    qtbot.waitUntil(lambda: orchestrator.progress >= 10, timeout=3000)
    gate.set()
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)

    orchestrator.progress_changed.connect(lambda p, m: updates.append(p))
    # several simulator intervals
    qtbot.wait(150)

    assert updates == []
    assert orchestrator.progress == 0


def test_step_for_finished_job_does_not_touch_next_job(qtbot, orchestrator, client):
    gate = client.hold()
    client.results["upload_file"] = make_song("1")
    orchestrator.submit_file("first.mp3")
    first = orchestrator.job
    gate.set()
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)

    client.hold()
    client.results["upload_file"] = make_song("2")
    orchestrator.submit_file("second.mp3")
    second = orchestrator.job
    updates = []
    orchestrator.progress_changed.connect(lambda p, m: updates.append((p, m)))

    # a late tick still bound to the first job
    orchestrator._on_step(first, 80, "Mixing remaining stems...")

    assert updates == []
    assert second.progress == 0
    assert second.phase_message == "Uploading file..."
    assert first.progress == 100
    client.gate.set()
    qtbot.waitUntil(lambda: not orchestrator.busy, timeout=3000)

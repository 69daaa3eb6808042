from cadentis.app import WorkerPoolSettings


def test_defaults_without_environment():
    settings = WorkerPoolSettings.from_env({})

    assert settings.max_workers == 4
    assert settings.max_concurrent_tasks == 3
    assert settings.chunk_size == 10_000
    assert settings.task_timeout is None


def test_environment_overrides():
    settings = WorkerPoolSettings.from_env(
        {
            "CADENTIS_MAX_WORKERS": "8",
            "CADENTIS_MAX_CONCURRENT_TASKS": "5",
            "CADENTIS_CHUNK_SIZE": "500",
            "CADENTIS_TASK_TIMEOUT": "1.5",
        }
    )

    assert settings == WorkerPoolSettings(
        max_workers=8, max_concurrent_tasks=5, chunk_size=500, task_timeout=1.5
    )


def test_invalid_values_fall_back_to_defaults():
    settings = WorkerPoolSettings.from_env(
        {
            "CADENTIS_MAX_WORKERS": "many",
            "CADENTIS_MAX_CONCURRENT_TASKS": "0",
            "CADENTIS_CHUNK_SIZE": "-3",
            "CADENTIS_TASK_TIMEOUT": "soon",
        }
    )

    assert settings == WorkerPoolSettings()


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CADENTIS_MAX_WORKERS", "2")
    monkeypatch.delenv("CADENTIS_TASK_TIMEOUT", raising=False)

    assert WorkerPoolSettings.from_env().max_workers == 2

import pytest

from models.application import ApplicationRecord
from models.job import JobDescriptor
from services.application_store import InMemoryApplicationStore
from services.errors import PersistenceError


@pytest.fixture
def store():
    return InMemoryApplicationStore(
        jobs={"job-1": JobDescriptor(title="Backend Engineer", skills="Go, SQL")},
        applications={"app-1": {"jobId": "job-1", "interviewStatus": "not_started"}},
    )


@pytest.mark.asyncio
async def test_get_job(store):
    job = await store.get_job("job-1")
    assert job.skills == ("Go", "SQL")


@pytest.mark.asyncio
async def test_get_application(store):
    record = await store.get_application("app-1")
    assert isinstance(record, ApplicationRecord)
    assert record.id == "app-1"
    assert record.job_id == "job-1"
    assert record.interview_score is None


@pytest.mark.asyncio
async def test_update_merges_and_logs_writes(store):
    await store.update_application("app-1", {"interviewScore": 82, "interviewStatus": "completed"})
    record = await store.get_application("app-1")
    assert record.interview_score == 82
    assert record.interview_status == "completed"
    assert record.job_id == "job-1"
    assert store.writes == [("app-1", {"interviewScore": 82, "interviewStatus": "completed"})]


@pytest.mark.asyncio
async def test_writes_are_copied(store):
    fields = {"analysis": {"strengths": ["a"]}}
    await store.update_application("app-1", fields)
    fields["analysis"]["strengths"].append("b")
    assert store.applications["app-1"]["analysis"]["strengths"] == ["a"]


@pytest.mark.asyncio
@pytest.mark.parametrize("call", ["get_job", "get_application"])
async def test_missing_records(store, call):
    with pytest.raises(PersistenceError):
        await getattr(store, call)("missing")


@pytest.mark.asyncio
async def test_update_missing_application(store):
    with pytest.raises(PersistenceError):
        await store.update_application("missing", {"interviewScore": 1})
    assert store.writes == []

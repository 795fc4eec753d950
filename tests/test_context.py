import time

import pytest

from minio_uploader import TransferCancelledError, TransferError, UploadContext
from minio_uploader.context import CANCELED, DEADLINE_EXCEEDED


@pytest.mark.unit
def test_background_context_should_never_be_done() -> None:
    ctx = UploadContext.background()

    assert ctx.done is False
    assert ctx.err() is None
    assert ctx.remaining() is None
    ctx.check("key")


@pytest.mark.unit
def test_should_expire_once_deadline_passes() -> None:
    ctx = UploadContext.with_deadline(time.monotonic() - 1)

    assert ctx.expired is True
    assert ctx.err() == DEADLINE_EXCEEDED
    assert ctx.remaining() == 0.0


@pytest.mark.unit
def test_should_report_remaining_time_before_deadline() -> None:
    ctx = UploadContext.with_timeout(60)

    assert ctx.done is False
    assert 0 < ctx.remaining() <= 60


@pytest.mark.unit
def test_should_raise_cancellation_as_transfer_error() -> None:
    ctx = UploadContext.with_timeout(60)
    ctx.cancel()

    with pytest.raises(TransferError) as exc_info:
        ctx.check("photos/cat.jpg")

    assert isinstance(exc_info.value, TransferCancelledError)
    assert exc_info.value.reason == CANCELED
    assert exc_info.value.object_name == "photos/cat.jpg"


@pytest.mark.unit
def test_child_should_be_cancelled_with_parent() -> None:
    parent = UploadContext.background()
    child = UploadContext.with_timeout(60, parent=parent)

    parent.cancel()

    assert child.cancelled is True
    assert child.err() == CANCELED


@pytest.mark.unit
def test_child_should_not_outlive_parent_deadline() -> None:
    parent = UploadContext.with_timeout(1)
    child = UploadContext.with_timeout(60, parent=parent)

    assert child.deadline == parent.deadline


@pytest.mark.unit
def test_cancelling_child_should_not_cancel_parent() -> None:
    parent = UploadContext.background()
    child = UploadContext.with_timeout(60, parent=parent)

    child.cancel()

    assert child.done is True
    assert parent.done is False

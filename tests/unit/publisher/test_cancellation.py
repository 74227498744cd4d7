"""Unit tests for publisher.cancellation module."""

import pytest

from src.publisher.cancellation import CancellationToken
from src.publisher.errors import PublishCancelledError, PublishStep


class TestCancellationToken:

    def test_not_cancelled_by_default(self):
        token = CancellationToken()

        assert token.cancelled is False
        token.raise_if_cancelled(PublishStep.PUBLISH)

    def test_cancel_raises_with_step(self):
        token = CancellationToken()
        token.cancel()

        with pytest.raises(PublishCancelledError) as exc_info:
            token.raise_if_cancelled(PublishStep.ROOT_RESOLUTION)

        assert token.cancelled is True
        assert exc_info.value.step == PublishStep.ROOT_RESOLUTION
        assert str(exc_info.value) == "Publish cancelled before root resolution"

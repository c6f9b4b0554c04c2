"""Tests for usage request and response schemas."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from quotaguard.domains.usage.types import AspectRatio, OperationKind
from quotaguard.models.artifact import ArtifactRecord
from quotaguard.schemas import Artifact, SubscriptionSummary, TrackUsageRequest, UsageSnapshot


class TestTrackUsageRequest:
    def test_camel_case_fields(self):
        req = TrackUsageRequest.model_validate(
            {
                "operationType": "magic_edit",
                "imageUrl": "  https://cdn.example.com/a.png ",
                "aspectRatio": "9:16",
            }
        )

        assert req.operation_type == OperationKind.MAGIC_EDIT
        assert req.image_url == "https://cdn.example.com/a.png"
        assert req.aspect_ratio == AspectRatio.NINE_SIXTEEN
        assert req.metadata == {}

    def test_null_metadata_is_empty(self):
        req = TrackUsageRequest.model_validate(
            {"operationType": "generate", "imageUrl": "x", "metadata": None}
        )

        assert req.metadata == {}

    @pytest.mark.parametrize(
        "body",
        [
            {"operationType": "GENERATE", "imageUrl": "x"},
            {"operationType": "generate", "imageUrl": ""},
            {"operationType": "generate", "imageUrl": "x", "aspectRatio": "21:9"},
            {"operationType": "generate", "imageUrl": "x", "style": "s" * 51},
        ],
    )
    def test_rejected(self, body):
        with pytest.raises(ValidationError):
            TrackUsageRequest.model_validate(body)


class TestSubscriptionSummary:
    def test_period_fields_omitted_when_missing(self):
        summary = SubscriptionSummary(is_subscribed=False, tier="Free Trial", status="none")

        assert summary.model_dump(by_alias=True) == {
            "isSubscribed": False,
            "tier": "Free Trial",
            "status": "none",
        }

    def test_period_fields_present_for_subscription(self):
        end = datetime(2025, 4, 1, tzinfo=timezone.utc)
        summary = SubscriptionSummary(
            is_subscribed=True,
            tier="Pro",
            status="active",
            current_period_end=end,
            cancel_at_period_end=False,
        )

        body = summary.model_dump(by_alias=True)

        assert body["currentPeriodEnd"] == end
        assert body["cancelAtPeriodEnd"] is False


class TestArtifact:
    def test_from_orm_row(self):
        record = ArtifactRecord(
            id=uuid4(),
            account_id="acct-1",
            operation_type="generate",
            image_url="https://cdn.example.com/a.png",
            artifact_metadata={"seed": 7},
            created_at=datetime(2025, 3, 2, tzinfo=timezone.utc),
        )

        artifact = Artifact.model_validate(record)
        body = artifact.model_dump(by_alias=True)

        assert body["user_id"] == "acct-1"
        assert body["metadata"] == {"seed": 7}
        assert "account_id" not in body

    def test_dumped_snapshot_validates_again(self):
        # Response models are dumped by alias and validated again on the way out.
        snapshot = UsageSnapshot.model_validate(
            {
                "subscription": {"isSubscribed": True, "tier": "Pro", "status": "active"},
                "usage": {"thumbnails_generated": 1},
                "limits": {"thumbnailsPerMonth": 100},
                "recentImages": [
                    {
                        "id": str(uuid4()),
                        "user_id": "acct-1",
                        "operation_type": "generate",
                        "image_url": "x",
                        "metadata": {"seed": 1},
                        "created_at": "2025-03-02T00:00:00Z",
                    }
                ],
            }
        )

        again = UsageSnapshot.model_validate(snapshot.model_dump(by_alias=True))

        assert again == snapshot
        assert again.recent_images[0].metadata == {"seed": 1}

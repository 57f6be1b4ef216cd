import pytest
from unittest.mock import MagicMock
from pydantic import ValidationError

from claims.model import CreateClaimDto, UpdateClaimRequest
from models.claim import Claim
from services.claim_service import ClaimService, is_valid_object_id
from services.finish_strategies import ClaimValidationStrategy
from utils.errors import InvalidOperationError, NotFoundError
from utils.vocab_enums import ClaimStatusEnum, DamageSeverityEnum

HIGH = {"severity": DamageSeverityEnum.HIGH.value}
LOW = {"severity": DamageSeverityEnum.LOW.value}


@pytest.mark.parametrize("value,expected", [
    ("65a1f0c2e4b0a1b2c3d4e5f6", True),
    ("65A1F0C2E4B0A1B2C3D4E5F6", True),
    ("65a1f0c2e4b0a1b2c3d4e5f", False),
    ("65a1f0c2e4b0a1b2c3d4e5f6a", False),
    ("zza1f0c2e4b0a1b2c3d4e5f6", False),
    ("65a1f0c2e4b0a1b2c3d4e5f6\n", False),
    ("", False),
    (None, False),
])
def test_is_valid_object_id(value, expected):
    assert is_valid_object_id(value) is expected


class TestCreate:
    def test_create_claim_with_damages_sums_prices(self, test_db):
        dto = CreateClaimDto(
            title="Accident",
            description="Rear-ended at a light",
            damages=[
                {"part": "Bumper", "severity": "LOW", "imageUrl": "http://img.com/1", "price": 100},
                {"part": "Windshield", "severity": "HIGH", "imageUrl": "http://img.com/2", "price": 250.50},
            ],
        )

        claim = ClaimService(test_db).create(dto)

        assert claim.status == ClaimStatusEnum.PENDING.value
        assert claim.total_amount == 350.50
        assert [damage["part"] for damage in claim.damages] == ["Bumper", "Windshield"]
        assert all(is_valid_object_id(damage["id"]) for damage in claim.damages)
        assert test_db.get(Claim, claim.id) is not None

    def test_create_claim_without_damages(self, test_db):
        claim = ClaimService(test_db).create(CreateClaimDto(title="Empty", description="Nothing yet"))

        assert claim.total_amount == 0
        assert claim.damages == []
        assert is_valid_object_id(claim.id)
        assert claim.created_at is not None


class TestGetAndList:
    def test_get_by_id(self, test_db, seed_claim):
        assert ClaimService(test_db).get_by_id(seed_claim.id).id == seed_claim.id

    def test_get_by_id_accepts_uppercase_hex(self, test_db, seed_claim):
        assert ClaimService(test_db).get_by_id(seed_claim.id.upper()).id == seed_claim.id

    def test_get_by_id_missing(self, test_db):
        with pytest.raises(NotFoundError, match="not found"):
            ClaimService(test_db).get_by_id("0" * 24)

    def test_malformed_id_does_not_query(self):
        db_session = MagicMock()

        with pytest.raises(NotFoundError, match="Invalid ID format"):
            ClaimService(db_session).get_by_id("not-an-id")

        db_session.get.assert_not_called()
        db_session.query.assert_not_called()

    def test_list_empty(self, test_db):
        assert ClaimService(test_db).list() == []

    def test_list_returns_all_claims(self, test_db, make_claim):
        ids = {make_claim(title=f"Claim {i}").id for i in range(3)}
        assert {claim.id for claim in ClaimService(test_db).list()} == ids


class TestUpdate:
    def test_partial_update_only_changes_sent_fields(self, test_db, make_claim):
        claim = make_claim(title="Original", description="Original description")

        updated = ClaimService(test_db).update(claim.id, UpdateClaimRequest(title="Updated"))

        assert updated.title == "Updated"
        assert updated.description == "Original description"
        assert updated.status == ClaimStatusEnum.PENDING.value

    def test_description_can_be_cleared(self, test_db, seed_claim):
        updated = ClaimService(test_db).update(seed_claim.id, UpdateClaimRequest(description=None))
        assert updated.description is None

    def test_update_missing_claim(self, test_db):
        with pytest.raises(NotFoundError):
            ClaimService(test_db).update("0" * 24, UpdateClaimRequest(title="x"))

    def test_update_malformed_id(self, test_db):
        with pytest.raises(NotFoundError):
            ClaimService(test_db).update("123", UpdateClaimRequest(title="x"))

    @pytest.mark.parametrize("request_fields", [
        {"title": "New title"},
        {"description": "New description"},
        {"status": "PENDING"},
        {"status": "FINISHED"},
        {"totalAmount": 1},
        {},
    ])
    def test_finished_claim_is_immutable(self, test_db, make_claim, request_fields):
        claim = make_claim(status=ClaimStatusEnum.FINISHED.value)

        with pytest.raises(InvalidOperationError, match="finished claim"):
            ClaimService(test_db).update(claim.id, UpdateClaimRequest(**request_fields))

    def test_in_review_transitions(self, test_db, seed_claim):
        service = ClaimService(test_db)

        assert service.update(seed_claim.id, UpdateClaimRequest(status="IN_REVIEW")).status == "IN_REVIEW"
        assert service.update(seed_claim.id, UpdateClaimRequest(status="PENDING")).status == "PENDING"

    def test_finish_high_severity_short_description_fails(self, test_db, make_claim):
        claim = make_claim(description="Short desc.", damages=[HIGH])

        with pytest.raises(InvalidOperationError):
            ClaimService(test_db).update(claim.id, UpdateClaimRequest(status="FINISHED"))

        test_db.refresh(claim)
        assert claim.status == ClaimStatusEnum.PENDING.value

    def test_failed_finish_applies_no_fields(self, test_db, make_claim):
        """ Finish rules see the stored claim; a rejected update changes nothing."""
        claim = make_claim(title="Original", description="Short desc.", damages=[HIGH])

        with pytest.raises(InvalidOperationError):
            ClaimService(test_db).update(
                claim.id,
                UpdateClaimRequest(title="Changed", description="a" * 150, status="FINISHED"),
            )

        test_db.refresh(claim)
        assert claim.title == "Original"
        assert claim.description == "Short desc."

    def test_finish_high_severity_long_description_succeeds(self, test_db, make_claim):
        claim = make_claim(description="a" * 101, damages=[HIGH])

        updated = ClaimService(test_db).update(claim.id, UpdateClaimRequest(status="FINISHED"))

        assert updated.status == ClaimStatusEnum.FINISHED.value

    def test_finish_low_severity_short_description_succeeds(self, test_db, make_claim):
        claim = make_claim(description="Short", damages=[LOW, LOW])

        updated = ClaimService(test_db).update(claim.id, UpdateClaimRequest(status="FINISHED"))

        assert updated.status == ClaimStatusEnum.FINISHED.value

    def test_finish_from_in_review(self, test_db, make_claim):
        claim = make_claim(status=ClaimStatusEnum.IN_REVIEW.value, damages=[LOW])

        updated = ClaimService(test_db).update(claim.id, UpdateClaimRequest(status="FINISHED"))

        assert updated.status == ClaimStatusEnum.FINISHED.value

    def test_caller_total_amount_is_kept(self, test_db, make_claim):
        """ Damages are untouched, so the hook does not overwrite the sent total."""
        claim = make_claim(damages=[{"price": 100}])

        updated = ClaimService(test_db).update(claim.id, UpdateClaimRequest(totalAmount=999))

        assert updated.total_amount == 999
        assert sum(damage["price"] for damage in updated.damages) == 100

    def test_strategies_only_run_when_finishing(self, test_db, seed_claim):
        strategy = MagicMock(spec=ClaimValidationStrategy)
        service = ClaimService(test_db, finish_strategies=[strategy])

        service.update(seed_claim.id, UpdateClaimRequest(status="IN_REVIEW"))
        strategy.validate.assert_not_called()

        service.update(seed_claim.id, UpdateClaimRequest(status="FINISHED"))
        strategy.validate.assert_called_once()

    def test_custom_strategy_rejects_finish(self, test_db, seed_claim):
        strategy = MagicMock(spec=ClaimValidationStrategy)
        strategy.validate.side_effect = InvalidOperationError("Needs an adjuster report")

        with pytest.raises(InvalidOperationError, match="adjuster report"):
            ClaimService(test_db, finish_strategies=[strategy]).update(
                seed_claim.id, UpdateClaimRequest(status="FINISHED")
            )


@pytest.mark.parametrize("total", [float("inf"), float("-inf"), float("nan")])
def test_update_request_rejects_non_finite_total(total):
    with pytest.raises(ValidationError):
        UpdateClaimRequest(totalAmount=total)

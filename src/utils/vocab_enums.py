from enum import Enum

class ClaimStatusEnum(str, Enum):
    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    FINISHED = "FINISHED"

class DamageSeverityEnum(str, Enum):
    LOW = "LOW"
    MID = "MID"
    HIGH = "HIGH"

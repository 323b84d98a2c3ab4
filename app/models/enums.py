# app/models/enums.py
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class ItemCategory(str, Enum):
    ELECTRONICS = "Electronics"
    BOOKS = "Books"
    SPORTS_EQUIPMENT = "Sports Equipment"
    TOOLS = "Tools"
    MUSICAL_INSTRUMENTS = "Musical Instruments"
    FURNITURE = "Furniture"
    APPLIANCES = "Appliances"
    OTHER = "Other"


class ItemCondition(str, Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class Availability(str, Enum):
    AVAILABLE = "Available"
    RENTED = "Rented"
    MAINTENANCE = "Maintenance"
    UNAVAILABLE = "Unavailable"


class LendingStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    DISPUTED = "Disputed"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    LENDING_REQUEST = "LendingRequest"
    REQUEST_ACCEPTED = "RequestAccepted"
    REQUEST_REJECTED = "RequestRejected"
    RETURN_REMINDER = "ReturnReminder"
    LATE_RETURN = "LateReturn"
    REVIEW = "Review"
    MESSAGE = "Message"
    SYSTEM = "System"
    VERIFICATION = "Verification"
    VERIFICATION_MESSAGE = "VerificationMessage"


class ReviewType(str, Enum):
    LENDER = "Lender"
    BORROWER = "Borrower"


class ReportStatus(str, Enum):
    PENDING = "Pending"
    RESOLVED = "Resolved"
    DISMISSED = "Dismissed"


def values(enum_cls) -> list[str]:
    return [e.value for e in enum_cls]

"""Request parameter names shared across endpoints."""

from __future__ import annotations


class ApiParams:
    """Wire names for query and body keys, grouped by area."""

    # User
    ID = "id"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    FULL_NAME = "fullName"
    EMAIL = "email"
    COUNTRY_CODE = "countryCode"
    PHONE = "phone"
    PHONE_NUMBER = "phoneNumber"
    USER_ID = "userId"
    PROFILE_IMAGE = "profileImage"
    NAME = "name"
    ROLE = "role"

    # Authentication
    OTP = "otp"
    DEVICE_ID = "deviceId"
    FCM_TOKEN = "fcmToken"

    # Pagination
    PAGE = "page"
    LIMIT = "limit"
    SEARCH = "search"

    # Location
    LAT = "lat"
    LONG = "long"
    ADDRESS_ID = "addressId"

    # Business
    BUSINESS_NAME = "businessName"
    BUSINESS_ID = "businessId"
    WORKSPACE_ID = "workspaceId"
    BUSINESS_INFO_ID = "businessInfoId"

    # Service
    SERVICE_ID = "serviceId"
    IS_AVAILABLE = "isAvailable"
    SERVICE_TYPE = "serviceType"
    CATEGORY_ID = "categoryId"
    SUBCATEGORY_ID = "subcategoryId"
    PRICE = "price"
    PRICE_TYPE = "priceType"
    DURATION = "duration"
    DESCRIPTION = "description"
    TERMS_AND_CONDITION = "termsAndCondition"
    AVAILABLE_FOR = "availableFor"
    VALID_FOR = "validFor"
    NO_OF_SERVICES = "noOfServices"

    # Booking
    DATE = "date"
    START_DATE = "startDate"
    END_DATE = "endDate"
    START_TIME = "startTime"
    BOOK_SERVICE_ID = "bookServiceId"

    # Payment
    CHARGE_ID = "chargeId"
    IS_FREE = "isFree"

    # Generic
    STATUS = "status"
    TYPE = "type"


def pagination(page: int, limit: int, search: str | None = None) -> dict[str, object]:
    """Query mapping for a paginated listing; ``search`` is dropped when absent."""

    return {ApiParams.PAGE: page, ApiParams.LIMIT: limit, ApiParams.SEARCH: search}

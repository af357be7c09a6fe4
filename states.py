# states.py
(
    BOOKING_SERVICE,
    BOOKING_DATE,
    BOOKING_TIME,
    BOOKING_NAME,
    BOOKING_PHONE,
    BOOKING_EMAIL,
    BOOKING_MESSAGE,
    BOOKING_CONFIRM,
    CONTACT_NAME,
    CONTACT_EMAIL,
    CONTACT_SUBJECT,
    CONTACT_MESSAGE,
    CONTACT_CONFIRM,
) = range(13)

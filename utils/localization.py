# utils/localization.py
from config import DEFAULT_LANGUAGE as CONFIGURED_LANGUAGE

LANGUAGES = {
    "Tiếng Việt": "vi",
    "English": "en"
}

DEFAULT_LANGUAGE = CONFIGURED_LANGUAGE if CONFIGURED_LANGUAGE in LANGUAGES.values() else "vi"

translations = {
    "vi": {
        "welcome": "Chào mừng bạn đến với Hair Studio!",
        "menu": "Menu chính:",
        "menu_services": "Dịch vụ",
        "menu_book": "Đặt lịch",
        "menu_contact": "Liên hệ",
        "menu_language": "Ngôn ngữ",
        "choose_language": "Chọn ngôn ngữ:",
        "language_set": "Đã chọn ngôn ngữ: Tiếng Việt",
        "no_services": "Hiện chưa có dịch vụ nào.",
        "duration": "Thời gian: {minutes} phút",
        "book_button": "Đặt Lịch",
        "choose_service": "Chọn dịch vụ",
        "continue": "Tiếp tục ➡",
        "service_chosen": "Bạn đã chọn: {service}",
        "choose_day": "Chọn ngày (hoặc nhập theo dạng YYYY-MM-DD):",
        "invalid_date": "Ngày không hợp lệ. Nhập theo dạng YYYY-MM-DD, không chọn ngày trong quá khứ.",
        "choose_time": "Chọn giờ",
        "times_for_day": "Giờ trống ngày {date}:",
        "no_times": "Ngày {date} không còn giờ trống.",
        "change_day": "Đổi ngày",
        "change_service": "Đổi dịch vụ",
        "ask_name": "Họ và tên của bạn:",
        "ask_phone": "Số điện thoại (hoặc bấm nút chia sẻ):",
        "share_phone": "Chia sẻ số điện thoại",
        "invalid_phone": "Số điện thoại không hợp lệ, vui lòng nhập lại.",
        "ask_email": "Email của bạn:",
        "invalid_email": "Email không hợp lệ, vui lòng nhập lại.",
        "ask_message": "Lời nhắn cho salon (hoặc /skip để bỏ qua):",
        "booking_summary": (
            "<b>Thông tin đặt lịch</b>\n"
            "Dịch vụ: {service}\n"
            "Ngày: {date}\n"
            "Giờ: {time}\n"
            "Họ tên: {name}\n"
            "Điện thoại: {phone}\n"
            "Email: {email}\n"
            "Lời nhắn: {message}"
        ),
        "ask_subject": "Tiêu đề:",
        "ask_contact_message": "Nội dung tin nhắn:",
        "contact_summary": (
            "<b>Liên hệ</b>\n"
            "Họ tên: {name}\n"
            "Email: {email}\n"
            "Tiêu đề: {subject}\n"
            "Nội dung: {message}"
        ),
        "confirm": "Xác nhận",
        "cancel": "Hủy",
        "cancelled": "Đã hủy.",
        "submitting": "Đang gửi, vui lòng chờ...",
        "missing_fields": "Vui lòng điền đủ thông tin: {fields}",
        "error_prefix": "Có lỗi xảy ra: ",
        "success_default": "Gửi thành công!",
        "empty": "—"
    },
    "en": {
        "welcome": "Welcome to Hair Studio!",
        "menu": "Main menu:",
        "menu_services": "Services",
        "menu_book": "Book",
        "menu_contact": "Contact",
        "menu_language": "Language",
        "choose_language": "Choose a language:",
        "language_set": "Language set: English",
        "no_services": "No services available yet.",
        "duration": "Duration: {minutes} min",
        "book_button": "Book",
        "choose_service": "Choose a service",
        "continue": "Continue ➡",
        "service_chosen": "You chose: {service}",
        "choose_day": "Choose a day (or type it as YYYY-MM-DD):",
        "invalid_date": "Invalid date. Use YYYY-MM-DD and do not pick a past day.",
        "choose_time": "Choose a time",
        "times_for_day": "Free times on {date}:",
        "no_times": "No free times left on {date}.",
        "change_day": "Change day",
        "change_service": "Change service",
        "ask_name": "Your full name:",
        "ask_phone": "Phone number (or press the share button):",
        "share_phone": "Share phone number",
        "invalid_phone": "Invalid phone number, please try again.",
        "ask_email": "Your email:",
        "invalid_email": "Invalid email, please try again.",
        "ask_message": "A message for the salon (or /skip):",
        "booking_summary": (
            "<b>Booking details</b>\n"
            "Service: {service}\n"
            "Date: {date}\n"
            "Time: {time}\n"
            "Name: {name}\n"
            "Phone: {phone}\n"
            "Email: {email}\n"
            "Message: {message}"
        ),
        "ask_subject": "Subject:",
        "ask_contact_message": "Your message:",
        "contact_summary": (
            "<b>Contact</b>\n"
            "Name: {name}\n"
            "Email: {email}\n"
            "Subject: {subject}\n"
            "Message: {message}"
        ),
        "confirm": "Confirm",
        "cancel": "Cancel",
        "cancelled": "Cancelled.",
        "submitting": "Sending, please wait...",
        "missing_fields": "Please fill in: {fields}",
        "error_prefix": "An error occurred: ",
        "success_default": "Sent successfully!",
        "empty": "—"
    }
}

SHORT_DAYS = {
    "vi": ["T2", "T3", "T4", "T5", "T6", "T7", "CN"],
    "en": ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
}

def get_texts(lang_code):
    return translations.get(lang_code, translations[DEFAULT_LANGUAGE])

def menu_labels(key):
    """Every translation of a menu button, for matching incoming text."""
    return [texts[key] for texts in translations.values()]

# utils/session.py
from utils.localization import DEFAULT_LANGUAGE

SELECTED_SERVICE_KEY = "selectedServiceId"
BOOKING_FORM = "booking_form"
CONTACT_FORM = "contact_form"


def get_api(context):
    return context.bot_data["api"]

def get_user_language(context):
    return context.user_data.get("lang", DEFAULT_LANGUAGE)

def set_user_language(context, lang_code):
    context.user_data["lang"] = lang_code

def get_form(context, form_key):
    return context.user_data.setdefault(form_key, {})

def clear_form(context, form_key):
    context.user_data.pop(form_key, None)

# "Book" on a service card -> booking selector, then forgotten
def remember_selected_service(context, service_id):
    context.user_data[SELECTED_SERVICE_KEY] = str(service_id)

def peek_selected_service(context):
    return context.user_data.get(SELECTED_SERVICE_KEY)

def forget_selected_service(context):
    context.user_data.pop(SELECTED_SERVICE_KEY, None)

def is_submitting(context, form_key):
    return context.user_data.get(f"{form_key}_submitting", False)

def set_submitting(context, form_key, value):
    if value:
        context.user_data[f"{form_key}_submitting"] = True
    else:
        context.user_data.pop(f"{form_key}_submitting", None)

def next_generation(context, name):
    """Starts a new request of kind `name`; older responses become stale."""
    generations = context.user_data.setdefault("generations", {})
    generations[name] = generations.get(name, 0) + 1
    return generations[name]

def is_current_generation(context, name, generation):
    return context.user_data.get("generations", {}).get(name) == generation

# app.py
# Streamlit front end: `streamlit run app.py`

import uuid

from dotenv import load_dotenv

load_dotenv()  # ← Must precede any import depending on .env

import streamlit as st

from ai.gateway import create_gateway
from core.config import load_settings
from core.errors import TripPlannerError
from core.models import TripRequest
from services.display import booking_url, day_image, hop_label, provider_label
from services.planner import plan_trip

DAY_CHOICES = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 14]

# ──────────────────────────────────────────────────────────────────────────────
# 0. Streamlit configuration
# ──────────────────────────────────────────────────────────────────────────────
st.set_page_config(page_title="Road Trip Planner", layout="centered")

try:
    settings = load_settings(dotenv=False)
except ValueError as e:  # unknown LLM_PROVIDER
    st.error(f"⚠️ {e}")
    st.stop()


@st.cache_resource
def get_gateway():
    """One gateway per process; raises MissingCredentialError without a key."""
    return create_gateway(load_settings(dotenv=False))


# ──────────────────────────────────────────────────────────────────────────────
# 1. session_state initialisation (default values)
# ──────────────────────────────────────────────────────────────────────────────
defaults = {
    "plan": None,            # TripPlan of the last successful request
    "error_message": "",
    "request_token": None,   # token of the most recent submission
}
for k, v in defaults.items():
    st.session_state.setdefault(k, v)

# ──────────────────────────────────────────────────────────────────────────────
# 2. Input form
# ──────────────────────────────────────────────────────────────────────────────
st.title("🚗 Road Trip Planner")
with st.form("trip_form"):
    col_start, col_dest, col_days = st.columns([3, 3, 1])
    start_input = col_start.text_input("Start", placeholder="New York, NY")
    dest_input = col_dest.text_input("Destination", placeholder="Miami, FL")
    days_input = col_days.selectbox("Days", DAY_CHOICES, index=2)
    with st.expander("Advanced options"):
        images_input = st.checkbox(
            "Generate custom images",
            value=True,
            help="Creates AI-generated images for each day of your trip. "
                 "Planning will take longer.",
        )
    submitted = st.form_submit_button("Plan trip")

# ──────────────────────────────────────────────────────────────────────────────
# 3. On form submission
# ──────────────────────────────────────────────────────────────────────────────
if submitted:
    token = uuid.uuid4().hex
    st.session_state.request_token = token
    st.session_state.error_message = ""
    try:
        trip_req = TripRequest(
            start_location=start_input,
            destination=dest_input,
            duration=int(days_input),
            generate_images=images_input,
        )
        gateway = get_gateway()
        with st.spinner("🤖 Planning your road trip…"):
            plan = plan_trip(gateway, trip_req)
        # A newer submission owns the page: drop this result.
        if st.session_state.request_token == token:
            st.session_state.plan = plan
    except (TripPlannerError, ValueError) as e:
        if st.session_state.request_token == token:
            st.session_state.error_message = f"⚠️ {e}"
            st.session_state.plan = None

# ──────────────────────────────────────────────────────────────────────────────
# 4. Error / warning banners
# ──────────────────────────────────────────────────────────────────────────────
if st.session_state.error_message:
    st.error(st.session_state.error_message)

plan = st.session_state.plan
if plan is not None:
    for warning in plan.warnings:
        st.warning(warning)

# ──────────────────────────────────────────────────────────────────────────────
# 5. Itinerary timeline
# ──────────────────────────────────────────────────────────────────────────────
if plan is not None:
    req = plan.request
    st.subheader(f"🗺️ {req.start_location} → {req.destination}")
    show_images = any(d.image for d in plan.itinerary)

    for d in plan.itinerary:
        st.markdown(f"### Day {d.day}: {d.from_} → {d.to}")
        if d.travel_time:
            st.caption(f"Total drive time: {d.travel_time}")

        if show_images:
            text_col, image_col = st.columns([2, 1])
        else:
            text_col, image_col = st.container(), None

        with text_col:
            for i, attraction in enumerate(d.attractions):
                st.markdown(f"**{i + 1}.** {attraction}")
                label = hop_label(d, i)
                if label:
                    st.caption(f"🚗 {label}")
            st.markdown(f"🛏️ **Overnight:** {d.overnight}")
            st.link_button("Book Hotel", booking_url(d.overnight))

        if image_col is not None:
            with image_col:
                st.image(day_image(d), caption=d.overnight, width="stretch")
        st.markdown("---")

st.caption(f"Powered by {provider_label(settings.provider)}")

import logging

import streamlit as st

from academy.config import LOG_LEVEL
from academy.services.local_store import LocalStore
from academy.ui.classes_view import render_classes, render_students
from academy.ui.payroll_view import render_payroll
from academy.ui.registration_view import render_registration
from academy.ui.seats_view import render_my_seat, render_seat_admin
from academy.ui.sessions_view import render_sessions
from academy.ui.state import QueryCache

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="Academy Admin", page_icon="🎓", layout="wide")


@st.cache_resource
def get_local_store() -> LocalStore:
    return LocalStore()


cache = QueryCache()

with st.sidebar:
    st.title("🎓 Academy Admin")
    if st.button("Reload data", key="reload_all"):
        cache.clear()
        st.rerun()

# -----------------------------
# Streamlit UI
# -----------------------------
(
    tab_sessions,
    tab_classes,
    tab_students,
    tab_seat_admin,
    tab_my_seat,
    tab_payroll,
    tab_register,
) = st.tabs(["Sessions", "Classes", "Students", "Seat Management", "My Seat", "Payroll", "Registration"])

with tab_sessions:
    render_sessions(cache)

with tab_classes:
    render_classes(cache)

with tab_students:
    render_students(cache)

with tab_seat_admin:
    render_seat_admin(cache)

with tab_my_seat:
    render_my_seat(cache, get_local_store())

with tab_payroll:
    render_payroll(cache)

with tab_register:
    render_registration(cache)

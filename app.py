import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Any, Dict, Optional

from core.data import DEFAULT_CITY, list_cities, load_judge_table
from core.filters import THRESHOLD_TABLES, normalize_filters
from core.i18n import Locale, messages_for, sort_options
from core.metrics_city import compute_city_page
from core.metrics_judge import compute_judge_page
from core.ring import geometry_from_dict
from core.svg import ring_svg


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #2a2d2a;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #9ca3af;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.6rem;font-weight: 700;}
        .card {border: 1px solid #2a2d2a;border-radius: 12px;padding: 16px;margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;margin-bottom: 8px;}
        .ring-caption {text-align: center;font-size: 0.9rem;}
        .stat-number {font-weight: 700;color: #C5FBA3;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_page_header(title: str, breadcrumb: str):
    st.markdown(
        f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
        unsafe_allow_html=True,
    )


def render_rings(rings: Dict[str, Any]):
    cols = st.columns(len(rings))
    for col, ring in zip(cols, rings.values()):
        geometry = geometry_from_dict(ring["geometry"])
        with col:
            st.markdown(ring_svg(geometry, animate=ring["animate"], title=ring["title"]), unsafe_allow_html=True)
            st.markdown(f"<div class='ring-caption'>{ring['title']}</div>", unsafe_allow_html=True, help=ring["info"])
            if "text" in ring:
                st.caption(ring["text"])


def render_not_found(payload: Dict[str, Any]):
    st.warning(payload["message"])


# ---------- UI setup ----------
st.set_page_config(page_title="Asylum Decisions by Judge", layout="wide")
inject_base_styles()

table = load_judge_table()
cities = list_cities(table)
if not cities:
    st.error("No judge data found. Check data/judge_grant_rates.json.")
    st.stop()

# ----- Sidebar: navigation + filters -----
with st.sidebar:
    language = st.selectbox("Language", options=[loc.value for loc in Locale], index=0)
    msgs = messages_for(language)
    nav_choice = st.radio("Navigate", [msgs.city, msgs.judge], index=0)

    st.markdown("---")
    default_idx = cities.index(DEFAULT_CITY) if DEFAULT_CITY in cities else 0
    city = st.selectbox(msgs.city, options=cities, index=default_idx)
    options = sort_options(language)
    sort_label = st.selectbox(msgs.sort_by, options=[o["label"] for o in options], index=0)
    sort_value = next(o["value"] for o in options if o["label"] == sort_label)
    judge_query: Optional[str] = st.text_input(msgs.judge, "")

    with st.expander("Advanced settings", expanded=False):
        thresholds_version = st.selectbox("Color thresholds", options=sorted(THRESHOLD_TABLES), index=0)
        animate = st.checkbox("Animate rings", value=True)

filters = normalize_filters(
    {
        "city": city,
        "sort": sort_value,
        "language": language,
        "thresholds_version": thresholds_version,
        "animate": animate,
    }
)

if nav_choice == msgs.city:
    payload = compute_city_page(filters, table)
    if not payload["found"]:
        render_not_found(payload)
        st.stop()
    labels = payload["labels"]
    render_page_header(payload["city"], f"{labels['city']} · {payload['judge_count']} {labels['judges']}")
    with card(labels["average_rates"]):
        render_rings(payload["rings"])
    with card(labels["city_stats"]):
        st.markdown(payload["summary"])
    with card(labels["judges"]):
        rows = pd.DataFrame(payload["judges"])
        if not rows.empty:
            st.dataframe(
                rows[["judge_name", "granted_asylum_rate", "granted_other_relief_rate", "denied_rate", "total_decisions"]],
                hide_index=True,
                use_container_width=True,
            )
        st.vega_lite_chart(payload["charts"]["judge_rates"], use_container_width=True)
else:
    payload = compute_judge_page(judge_query, filters, table)
    if not payload["found"]:
        render_not_found(payload)
        st.stop()
    labels = payload["labels"]
    render_page_header(payload["judge"], f"{labels['judge']} · {payload['city']}")
    with card(labels["judge_stats"]):
        st.markdown(payload["summary"])
    with card(labels["average_rates"]):
        render_rings(payload["rings"])

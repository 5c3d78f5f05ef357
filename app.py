"""
🏋️ Hevy Stats — Streamlit Dashboard
Run: streamlit run app.py
"""
import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from hevy_stats.analytics import calculate_stats, pr_table, weekly_volume
from hevy_stats.config import HEVY_API_KEY, MAX_CSV_BYTES, MUSCLE_GROUP_COLORS
from hevy_stats.csv_parser import parse_csv
from hevy_stats.errors import HevyStatsError
from hevy_stats.hevy_client import fetch_workouts

# ── Page Config ──────────────────────────────────────────────────────
st.set_page_config(page_title="Hevy Stats", page_icon="🏋️", layout="wide", initial_sidebar_state="expanded")

PL = dict(
    template="plotly_dark", paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
    margin=dict(l=40, r=20, t=40, b=40),
)


# ── Data Loading ─────────────────────────────────────────────────────
@st.cache_data(ttl=300)
def load_api(api_key: str):
    return fetch_workouts(api_key)


@st.cache_data
def load_upload(content: str):
    return parse_csv(content)


with st.sidebar:
    st.markdown("# 🏋️ Hevy Stats")
    source = st.radio("Fuente", ["📄 CSV export", "📡 Hevy API"])
    group = st.selectbox("PRs por", ["day", "week", "month"])
    if st.button("🔄 Actualizar datos", use_container_width=True):
        st.cache_data.clear()
        st.rerun()

workouts = ()
if source == "📄 CSV export":
    upload = st.sidebar.file_uploader("workouts.csv", type=["csv"])
    if upload is None:
        st.info("Sube el CSV exportado desde Hevy (Settings → Export data).")
        st.stop()
    if upload.size > MAX_CSV_BYTES:
        st.error("File size must be less than 10MB")
        st.stop()
    try:
        result = load_upload(upload.getvalue().decode("utf-8-sig"))
    except HevyStatsError as e:
        st.error(f"Error importando CSV: {e}")
        st.stop()
    workouts = result.workouts
    if result.warnings:
        with st.sidebar.expander(f"⚠️ {len(result.warnings)} avisos"):
            for w in result.warnings:
                st.caption(w)
else:
    api_key = HEVY_API_KEY or st.secrets.get("HEVY_API_KEY", "")
    if not api_key:
        st.error("Falta HEVY_API_KEY")
        st.stop()
    try:
        workouts = load_api(api_key)
    except Exception as e:
        st.error(f"Error cargando datos: {e}")
        st.stop()

stats = calculate_stats(workouts, pr_period=group)

# ── Dashboard ────────────────────────────────────────────────────────
c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Sesiones", stats["total_workouts"])
c2.metric("Volumen total", f"{stats['total_volume']:,} kg")
c3.metric("Vol / sesión", f"{stats['avg_volume_per_workout']:,} kg")
c4.metric("Series", stats["total_sets"])
c5.metric("Reps", stats["total_reps"])

left, right = st.columns(2)
with left:
    st.subheader("💪 Series por grupo muscular")
    mv = pd.DataFrame(
        [{"muscle_group": k, "sets": v} for k, v in stats["muscle_distribution"].items() if v > 0]
    )
    if mv.empty:
        st.caption("Sin ejercicios reconocidos")
    else:
        fig = px.pie(mv, values="sets", names="muscle_group", hole=0.45,
                     color="muscle_group", color_discrete_map=dict(MUSCLE_GROUP_COLORS))
        fig.update_layout(**PL)
        st.plotly_chart(fig, use_container_width=True, key="chart_muscles")

with right:
    st.subheader("🏆 PRs")
    prs = pd.DataFrame(stats["prs_over_time"])
    if prs.empty:
        st.caption("Sin PRs todavía")
    else:
        fig = go.Figure()
        fig.add_trace(go.Bar(x=prs["date"], y=prs["count"], marker_color="#eab308"))
        fig.update_layout(**PL)
        st.plotly_chart(fig, use_container_width=True, key="chart_prs")

st.subheader("📈 Volumen semanal")
wk = weekly_volume(workouts)
if not wk.empty:
    fig = go.Figure()
    fig.add_trace(go.Bar(x=wk["week_start"], y=wk["total_volume"], marker_color="#3b82f6", name="Volumen"))
    fig.update_layout(**PL)
    st.plotly_chart(fig, use_container_width=True, key="chart_weekly")

st.subheader("🏋️ Top ejercicios")
st.dataframe(pd.DataFrame(stats["top_exercises"]), use_container_width=True, hide_index=True)

st.subheader("🥇 Mejor e1RM por ejercicio")
st.dataframe(pr_table(workouts), use_container_width=True)

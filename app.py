"""
Streamlit dashboard for the FIFA wage model.
Run:
  streamlit run app.py
Expects data/fifa_clean.csv and data/model_coefficients.json (see DashboardConfig).
"""
from __future__ import annotations

import os

import pandas as pd
import streamlit as st

from fifa_wage_model.charts import box_chart, coefficient_chart, histogram_chart
from fifa_wage_model.coefficients import CoefficientSnapshot, CoefficientStore
from fifa_wage_model.data_models import DashboardConfig, FeatureVector
from fifa_wage_model.features import load_players_or_empty
from fifa_wage_model.pipeline import box_pipeline, histogram_pipeline, run
from fifa_wage_model.predict import format_currency, link_caption, predict
from fifa_wage_model.utils import ALL, FEET, POSITION_GROUPS, configure_logging

st.set_page_config(page_title="FIFA wage model", layout="wide")
configure_logging(os.environ.get("FIFA_WAGE_LOG_LEVEL", "INFO"))

CONFIG_PATH = os.environ.get("FIFA_WAGE_CONFIG")
config = DashboardConfig.from_json(CONFIG_PATH) if CONFIG_PATH else DashboardConfig()


@st.cache_resource
def _store(path: str) -> CoefficientStore:
    store = CoefficientStore(path)
    store.load()
    return store


@st.cache_data(show_spinner=True)
def _players(path: str) -> pd.DataFrame:
    return load_players_or_empty(path)


store = _store(config.coefficients_path)
players = _players(config.wages_path)

with st.sidebar:
    st.markdown("### Data")
    st.caption(f"Wages: {config.wages_path}")
    st.caption(f"Coefficients: {config.coefficients_path}")
    if st.button("Reload coefficients"):
        store.reload()
    snapshot: CoefficientSnapshot = store.snapshot
    if snapshot.error is not None:
        st.warning(f"Coefficients unavailable: {snapshot.error.message}")
    for issue in snapshot.issues:
        st.warning(issue.message)
    if players.empty:
        st.warning("No player data loaded.")

st.title("FIFA wage model")
st.caption(f"distribution, coefficients, and a predictor from age, FIFA rating, position and foot, values in {config.currency}")

# ---- histogram ----
st.subheader("Distribution of wages")
pos_filter = st.selectbox("Position group filter", [ALL, *POSITION_GROUPS])
hist_spec = histogram_pipeline(config, pos_filter)
st.vega_lite_chart(histogram_chart(run(players, hist_spec), hist_spec, config.currency), use_container_width=True)
st.caption("groups derived from the positions string; hover for counts")

# ---- coefficients ----
st.subheader("Model coefficients")
coef_frame = snapshot.to_frame()
if coef_frame.empty:
    st.info("No coefficients loaded; every term counts as 0.")
else:
    st.vega_lite_chart(coefficient_chart(coef_frame))
st.caption("bars right of zero raise the predicted wage, left lower it")

# ---- predictor ----
st.subheader("Predict a wage")
c1, c2, c3, c4 = st.columns(4)
age = c1.number_input("Age", min_value=16, max_value=45, value=24, step=1)
rating = c2.number_input("FIFA rating", min_value=40, max_value=99, value=85, step=1)
group = c3.selectbox("Position group", POSITION_GROUPS, index=POSITION_GROUPS.index("Midfielder"))
foot = c4.selectbox("Preferred foot", FEET, index=FEET.index("Right"))

features = FeatureVector(age=int(age), rating=int(rating), position_group=group, preferred_foot=foot)
st.metric("Predicted wage", format_currency(predict(snapshot.coefficients, features, config), config.currency))
st.caption(link_caption(config.target_is_log, config.currency))

# ---- box summary ----
st.subheader("Wage distribution by position")
box_spec = box_pipeline(config)
st.vega_lite_chart(box_chart(run(players, box_spec), box_spec, config.currency), use_container_width=True)
st.caption("box shows median and quartiles, whiskers min to max")

st.caption("Baseline (reference) levels have no coefficient; edit the JSON terms if your names differ.")

from pathlib import Path
import sys

from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

REPO_ROOT = Path(__file__).resolve().parent
# streamlit runs this file directly; import tierup from a checkout
SRC_DIR = REPO_ROOT / "src"
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from tierup.app.display import (
    analysis_to_dict,
    bottleneck_lines,
    effort_label,
    next_steps_lines,
    upgrade_size_label,
)
from tierup.config.rules import ADVANCEMENT_OPTIONS, EFFORT_LEVELS
from tierup.errors import CatalogError, IncompleteSelectionError
from tierup.processing.read import load_catalogs
from tierup.processing.selection import (
    RamFilters,
    component_label,
    cpu_series_options,
    filter_cpus,
    filter_gpus,
    filter_ram,
    gpu_card_manufacturer_options,
    gpu_chipset_options,
    ram_capacity_options,
    ram_ddr_options,
    ram_kit_label,
    ram_kit_options,
    ram_manufacturer_options,
    ram_speed_options,
)
from tierup.processing.normalize import ram_speed_mhz_label
from tierup.recommend.components import get_kind
from tierup.recommend.context import Catalogs, SessionContext
from tierup.recommend.engine import SystemAnalysis, analyze_system

ANY = "Any"
SELECTION_KEYS = ["sel_cpu", "sel_gpu", "sel_ram"]

st.set_page_config(page_title="TierUp Upgrade Advisor", page_icon="🖥️", layout="wide")


@st.cache_resource(show_spinner=False)
def _load_catalogs_cached() -> Catalogs:
    return load_catalogs()


def _opt(value: str) -> Optional[str]:
    return None if value == ANY else value


def _pick(label: str, records: List[Any], kind: str, key: str):
    if not records:
        st.sidebar.caption(f"No {kind} matches the filters above.")
        return None
    labels = [component_label(r, kind) for r in records]
    choice = st.sidebar.selectbox(label, range(len(records)), format_func=lambda i: labels[i], key=key)
    return records[choice]


def _cpu_sidebar(catalogs: Catalogs):
    st.sidebar.subheader("CPU")
    brand = _opt(st.sidebar.radio("Brand", [ANY, "AMD", "Intel"], horizontal=True, key="cpu_brand"))
    series = _opt(st.sidebar.selectbox(
        "Series", [ANY] + cpu_series_options(catalogs.cpus, brand), key="cpu_series"
    ))
    return _pick("Processor", filter_cpus(catalogs.cpus, brand, series), "CPU", "sel_cpu")


def _gpu_sidebar(catalogs: Catalogs):
    st.sidebar.subheader("GPU")
    maker = _opt(st.sidebar.radio("Chipset maker", [ANY, "NVIDIA", "AMD"], horizontal=True, key="gpu_maker"))
    chipset = _opt(st.sidebar.selectbox(
        "Chipset", [ANY] + gpu_chipset_options(catalogs.gpus, maker), key="gpu_chipset"
    ))
    card = _opt(st.sidebar.selectbox(
        "Card manufacturer",
        [ANY] + gpu_card_manufacturer_options(catalogs.gpus, maker, chipset),
        key="gpu_card",
    ))
    return _pick("Graphics card", filter_gpus(catalogs.gpus, maker, chipset, card), "GPU", "sel_gpu")


def _ram_sidebar(catalogs: Catalogs, cpu):
    st.sidebar.subheader("RAM")
    kits = ram_kit_options(catalogs.rams)
    kit = st.sidebar.selectbox(
        "Kit", [None] + kits, format_func=lambda k: ANY if k is None else ram_kit_label(k), key="ram_kit"
    )
    capacity = st.sidebar.selectbox(
        "Total capacity",
        [None] + ram_capacity_options(catalogs.rams, kit, cpu),
        format_func=lambda c: ANY if c is None else f"{c}GB",
        key="ram_capacity",
    )
    ddr = _opt(st.sidebar.selectbox(
        "Memory type", [ANY] + ram_ddr_options(catalogs.rams, kit, capacity, cpu), key="ram_ddr"
    ))
    scope = RamFilters(kit=kit, capacity=capacity, ddr=ddr)
    speed = st.sidebar.selectbox(
        "Speed",
        [None] + ram_speed_options(catalogs.rams, scope, cpu),
        format_func=lambda s: ANY if s is None else f"{ram_speed_mhz_label(s)} MHz",
        key="ram_speed",
    )
    scope = RamFilters(kit=kit, capacity=capacity, ddr=ddr, speed=speed)
    maker = _opt(st.sidebar.selectbox(
        "Manufacturer", [ANY] + ram_manufacturer_options(catalogs.rams, scope, cpu), key="ram_maker"
    ))
    filters = RamFilters(kit=kit, capacity=capacity, ddr=ddr, speed=speed, manufacturer=maker)
    return _pick("Memory kit", filter_ram(catalogs.rams, filters, cpu), "RAM", "sel_ram")


def _products_frame(analysis: SystemAnalysis) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = []
    for rank, product in enumerate(analysis.recommendation.products, 1):
        rows.append({
            "rank": rank,
            "name": product.name,
            "tier": product.tier,
            "score": round(product.score, 3),
            "effort": product.required_level,
            "extra parts": ", ".join(product.required_parts),
            "summary": get_kind(product.kind).describe(product.component),
        })
    return pd.DataFrame(rows)


st.title("TierUp Upgrade Advisor")
st.markdown("Pick your current CPU, GPU and RAM to find the bottleneck and the upgrades that fix it.")
with st.expander("How it works"):
    st.markdown(
        "- Every part sits in a performance tier from 1 to 7.\n"
        "- The lowest tier is the bottleneck; RAM at tier 4 or above never is.\n"
        "- Upgrades come from the target tier, must outscore your current part, "
        "and must fit the effort level you accept."
    )

if "analysis" not in st.session_state:
    st.session_state["analysis"] = None

try:
    catalogs = _load_catalogs_cached()
except CatalogError as exc:
    st.error(f"Component data could not be loaded: {exc}")
    st.stop()

st.sidebar.header("Your System")
counts = catalogs.counts()
st.sidebar.caption(f"CPUs {counts['CPU']:,} | GPUs {counts['GPU']:,} | RAM kits {counts['RAM']:,}")
if st.sidebar.button("Reset selection"):
    for key in SELECTION_KEYS:
        if key in st.session_state:
            del st.session_state[key]
    st.session_state["analysis"] = None

cpu = _cpu_sidebar(catalogs)
st.sidebar.divider()
gpu = _gpu_sidebar(catalogs)
st.sidebar.divider()
ram = _ram_sidebar(catalogs, cpu)

st.sidebar.divider()
st.sidebar.subheader("Upgrade preferences")
advancement = st.sidebar.radio(
    "Upgrade size",
    list(ADVANCEMENT_OPTIONS),
    format_func=lambda a: f"{upgrade_size_label(a)} ({'top tier' if a == 'max' else f'+{a}'})",
)
effort = st.sidebar.radio("Effort", list(EFFORT_LEVELS), format_func=effort_label)

left_col, right_col = st.columns([2.4, 1.2], gap="large")

with left_col:
    st.subheader("Analysis")
    if st.button("Analyze my system", type="primary"):
        context = SessionContext(catalogs, advancement=advancement, effort=effort).with_selection(
            cpu=cpu, gpu=gpu, ram=ram
        )
        try:
            st.session_state["analysis"] = analyze_system(context)
        except IncompleteSelectionError as exc:
            st.session_state["analysis"] = None
            st.error(str(exc))

    analysis = st.session_state.get("analysis")
    if analysis is not None:
        tiers = analysis.bottleneck.tiers
        cols = st.columns(3)
        for col, (name, tier) in zip(cols, tiers.items()):
            col.metric(name, f"Tier {tier}")
        for line in bottleneck_lines(analysis):
            st.write(line)

        rec = analysis.recommendation
        st.markdown(f"**{upgrade_size_label(rec.advancement)} upgrade for {rec.component}** "
                    f"(target tier {rec.target_tier}, {effort_label(rec.effort).lower()})")
        if rec.escalated_tier is not None:
            st.info(f"No verified upgrades in tier {rec.target_tier}; showing tier {rec.escalated_tier}.")

        products_df = _products_frame(analysis)
        if products_df.empty:
            st.warning(
                "No verified upgrades available for the selected effort level. "
                "Consider a larger upgrade size or higher effort."
            )
        else:
            st.dataframe(products_df, use_container_width=True, hide_index=True)

        st.subheader("What's Next?")
        for line in next_steps_lines(analysis):
            st.write(line)
    else:
        st.info("Select all three components and run the analysis.")


with right_col:
    st.subheader("Details")
    analysis = st.session_state.get("analysis")
    products = analysis.recommendation.products if analysis is not None else []
    if not products:
        st.info("Upgrade picks appear here after an analysis.")
    else:
        idx = st.selectbox(
            "Select a pick",
            range(len(products)),
            format_func=lambda i: f"#{i + 1} {products[i].name}",
        )
        product = products[idx]
        st.markdown(f"**{product.name}**")
        st.metric("Score", f"{product.score:.3f}")
        st.caption(f"Effort: {product.required_level.capitalize()}")
        for label, value in get_kind(product.kind).specs(product.component).items():
            st.write(f"{label}: {value}")
        for warning in product.warnings:
            st.warning(warning)
        if product.required_parts:
            st.caption(f"Additional parts likely needed: {', '.join(product.required_parts)}")
        for note in product.notes:
            st.caption(note)

        with st.expander("Show full record"):
            st.json(dict(product.component))

        with st.expander("Analysis JSON"):
            st.json(analysis_to_dict(analysis))

# Local: pip install -e . then streamlit run streamlit_app.py

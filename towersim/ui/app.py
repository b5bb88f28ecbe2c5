from __future__ import annotations

import io
import zipfile
from pathlib import Path

import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.io as pio

from towersim.alerting.alerts import AlertAgent
from towersim.config import Config
from towersim.orchestrator.sim import Simulation
from towersim.persistence.loader import load_from_directory
from towersim.persistence.saver import encode_aircraft, encode_queues, encode_terminals
from towersim.utils.errors import MalformedPersistedState


st.set_page_config(page_title="Control Tower Simulator", layout="wide")
st.title("Airport Control Tower")

with st.sidebar:
	st.header("Scenario")
	num_aircraft = st.slider("Aircraft", 1, 30, 8)
	num_airplane_terminals = st.slider("Airplane terminals", 0, 4, 2)
	num_helicopter_terminals = st.slider("Helicopter terminals", 0, 2, 1)
	gates = st.slider("Gates per terminal", 1, 6, 3)
	seed = st.number_input("Seed", min_value=0, value=42, step=1)
	save_dir = st.text_input("Or load save directory", value="")
	if st.button("Build Tower"):
		cfg = Config(
			num_aircraft=num_aircraft,
			num_airplane_terminals=num_airplane_terminals,
			num_helicopter_terminals=num_helicopter_terminals,
			gates_per_terminal=gates,
			seed=int(seed),
		)
		try:
			tower = load_from_directory(Path(save_dir), cfg) if save_dir else None
			st.session_state["sim"] = Simulation(cfg, tower=tower)
		except MalformedPersistedState as exc:
			st.error(f"Could not load save: {exc}")

sim = st.session_state.get("sim")
if sim is None:
	st.info("Configure a scenario and click 'Build Tower' in the sidebar.")
	st.stop()

ticks = st.slider("Ticks to run", 1, 100, 10)
if st.button("Run Ticks"):
	sim.run(num_ticks=ticks)

tower = sim.tower
metrics = sim.metrics
col1, col2, col3 = st.columns(3)
with col1:
	st.metric("Ticks Elapsed", tower.ticks_elapsed)
	st.metric("Next Runway Priority", "Landing" if tower.prefers_landing(tower.ticks_elapsed + 1) else "Takeoff")
with col2:
	st.metric("Landings", metrics.landings)
	st.metric("Departures", metrics.departures)
with col3:
	st.metric("Loads Completed", metrics.loads_completed)
	st.metric("Aircraft", len(tower.aircraft))

alerts = AlertAgent(sim.config).generate(tower)
if alerts:
	st.subheader("Alerts")
	for a in alerts:
		st.error(f"[{a.type}] {a.message}")

c1, c2 = st.columns(2)
with c1:
	st.subheader("Landing Queue")
	st.dataframe(pd.DataFrame([
		{"callsign": a.callsign, "fuel_percent": a.fuel_percent_remaining, "emergency": a.has_emergency(), "passenger": a.is_passenger}
		for a in tower.landing_queue.aircraft_in_order()
	]))
with c2:
	st.subheader("Takeoff Queue")
	st.dataframe(pd.DataFrame([{"callsign": a.callsign} for a in tower.takeoff_queue.aircraft_in_order()]))

st.subheader("Gates")
st.dataframe(pd.DataFrame([
	{
		"terminal": f"{type(t).__name__} {t.terminal_number}",
		"gate": g.gate_number,
		"aircraft": g.aircraft_at_gate.callsign if g.aircraft_at_gate else "",
		"loading_ticks_left": tower.loading.remaining(g.aircraft_at_gate) if g.aircraft_at_gate else None,
		"terminal_emergency": t.has_emergency(),
	}
	for t in tower.terminals for g in t.gates
]))

st.subheader("Aircraft")
st.dataframe(pd.DataFrame([
	{"callsign": a.callsign, "type": a.characteristics.name, "task": str(a.tasks.current_task()), "fuel_percent": a.fuel_percent_remaining, "emergency": a.has_emergency()}
	for a in tower.aircraft
]))

if not metrics.timeline.empty:
	fig = px.line(
		metrics.timeline,
		x="tick",
		y=["landing_queue", "takeoff_queue", "loading", "parked"],
		title="Queue Lengths per Tick",
	)
	fig.update_layout(xaxis_title="Tick", yaxis_title="Aircraft")
	st.plotly_chart(fig, use_container_width=True)

	if metrics.logs:
		st.subheader("Tower Event Log")
		log_df = pd.DataFrame(metrics.logs)
		st.dataframe(log_df.tail(100))

	# Export save files plus the run report (ZIP)
	buf = io.BytesIO()
	with zipfile.ZipFile(buf, mode="w", compression=zipfile.ZIP_DEFLATED) as z:
		z.writestr(sim.config.tick_file, f"{tower.ticks_elapsed}\n")
		z.writestr(sim.config.aircraft_file, encode_aircraft(tower) + "\n")
		z.writestr(sim.config.queues_file, encode_queues(tower) + "\n")
		z.writestr(sim.config.terminals_file, encode_terminals(tower) + "\n")
		z.writestr("timeline.csv", metrics.timeline.to_csv(index=False))
		z.writestr("timeline.html", pio.to_html(fig, full_html=True, include_plotlyjs="cdn"))
	st.download_button("Download save and report (ZIP)", data=buf.getvalue(), file_name="tower_save.zip", mime="application/zip")

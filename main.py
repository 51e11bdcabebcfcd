"""
Huvudapplikation för Streamlit-ruttritaren
"""

import streamlit as st
from streamlit_folium import st_folium

# Importera moduler
from config import DEFAULT_CENTER, GPX_FILENAME, GPX_MIME
from geocoding import search_places, candidate_title
from logging_config import configure
from map_utils import create_map, click_event
from models import Coordinate, RouteError, GeocodeFailure, PointMoved, PointRemoved
from session import PersistedState, RouteSession, SearchTracker
from url_hash import parse_hash_params, params_to_fragment, query_link
from utils import create_gpx, format_distance


class QueryParamsState(PersistedState):
    """
    Fragmentet speglat i sidans query params

    Servern ser aldrig webbläsarens #-fragment, så ruttens parametrar
    sparas som ?wps=...&td=... i stället.
    """

    def get(self) -> str:
        return params_to_fragment({key: st.query_params[key] for key in st.query_params})

    def set(self, fragment: str) -> None:
        st.query_params.from_dict(parse_hash_params(fragment))

    def link(self, fragment: str) -> str:
        return query_link(fragment)


def init_session_state():
    """Initiera session state"""
    if "route_session" not in st.session_state:
        st.session_state.route_session = RouteSession(QueryParamsState())
    if "search" not in st.session_state:
        st.session_state.search = SearchTracker(st.session_state.route_session.route)
    if "last_click" not in st.session_state:
        st.session_state.last_click = None


def apply_and_sync(session: RouteSession, event) -> None:
    """Kör en kartahändelse; fel visas utan att rutten ändras"""
    try:
        session.route.apply_event(event)
    except RouteError as e:
        st.error(str(e))
        return
    session.sync()
    st.rerun()


def render_sidebar(session: RouteSession):
    route = session.route

    # Distans
    km, mi = format_distance(route.total_distance)
    st.metric("Total distans", f"{km} km ({mi} mi)")

    st.divider()

    # Waypoints
    st.subheader(f"Waypoints ({len(route)})")
    if not len(route):
        st.info("Klicka på kartan för att lägga till waypoints…")

    for i, waypoint in enumerate(route.waypoints()):
        col_pt, col_del = st.columns([3, 1])
        with col_pt:
            st.code(f"{waypoint.coordinate.lat:.5f}, {waypoint.coordinate.lon:.5f}", language=None)
        with col_del:
            if st.button("Ta bort", key=f"del_{waypoint.id}"):
                apply_and_sync(session, PointRemoved(index=i, waypoint_id=waypoint.id))

    col_undo, col_clear = st.columns(2)
    with col_undo:
        if st.button("Ångra", disabled=not len(route), use_container_width=True):
            route.undo()
            session.sync()
            st.rerun()
    with col_clear:
        if st.button("Rensa", use_container_width=True):
            route.clear()
            session.sync()
            st.rerun()

    # Flytta punkt (ersätter dra-och-släpp som st_folium inte rapporterar)
    if len(route):
        with st.expander("Flytta waypoint"):
            waypoints = route.waypoints()
            selected = st.selectbox(
                "Waypoint",
                range(len(waypoints)),
                format_func=lambda i: f"#{i + 1}"
            )
            current = waypoints[selected]
            with st.form("move_form"):
                lat = st.number_input("Latitud", value=current.coordinate.lat, format="%.6f")
                lon = st.number_input("Longitud", value=current.coordinate.lon, format="%.6f")
                if st.form_submit_button("Flytta"):
                    try:
                        event = PointMoved(selected, Coordinate(lat, lon), waypoint_id=current.id)
                    except RouteError as e:
                        st.error(str(e))
                    else:
                        apply_and_sync(session, event)

    st.divider()

    # Inställningar
    st.subheader("Inställningar")
    st.checkbox(
        "Snappa till stigar (kommer senare)",
        value=session.snapping,
        disabled=True
    )
    auto_link = st.checkbox("Uppdatera länken automatiskt", value=session.auto_link)
    if auto_link != session.auto_link:
        session.auto_link = auto_link
        session.sync()

    # Import
    with st.form("import_form", clear_on_submit=True):
        link = st.text_input(
            "Importera länk",
            placeholder="Klistra in en URL med ?wps=... eller #wps=...",
        )
        if st.form_submit_button("Importera") and link:
            count = session.import_link(link)
            if count:
                session.sync()
                st.success(f"Läste in {count} waypoints")
            else:
                st.warning("Hittade inga waypoints i länken")

    st.caption("Tips: klicka på kartan för att lägga till waypoints, scrolla eller nyp för att zooma.")


def render_search(search: SearchTracker, session: RouteSession):
    """Platssökning ovanför kartan"""
    with st.form("search_form"):
        col_q, col_btn = st.columns([4, 1])
        with col_q:
            query = st.text_input(
                "Sök plats / adress",
                placeholder="T.ex. Willis Tower, Chicago",
                label_visibility="collapsed"
            )
        with col_btn:
            submitted = st.form_submit_button("Sök", use_container_width=True)

    if submitted and query.strip():
        ticket = search.begin(query)
        with st.spinner("Söker…"):
            try:
                candidates = search_places(query)
            except GeocodeFailure as e:
                search.fail(ticket, e)
            else:
                search.complete(ticket, candidates)

    if search.error:
        st.error(search.error)

    for i, candidate in enumerate(search.results):
        if st.button(
            f"{candidate_title(candidate)} · {candidate.label}",
            key=f"hit_{i}",
            use_container_width=True
        ):
            search.select(candidate)
            session.sync()
            st.rerun()


def main():
    """Huvudfunktion för Streamlit-appen"""
    st.set_page_config(
        page_title="TrailRouter-Lite",
        page_icon="🗺️",
        layout="wide"
    )

    configure()
    init_session_state()

    session: RouteSession = st.session_state.route_session
    search: SearchTracker = st.session_state.search
    session.sync()

    # Rubrik och export
    col_title, col_gpx = st.columns([3, 1])
    with col_title:
        st.title("TrailRouter-Lite")
    with col_gpx:
        points = session.route.snapshot()
        gpx_content = create_gpx(points) if len(points) >= 2 else ""
        st.download_button(
            label="Exportera GPX",
            data=gpx_content,
            file_name=GPX_FILENAME,
            mime=GPX_MIME,
            disabled=not gpx_content,
            use_container_width=True
        )
        with st.popover("Kopiera länk", use_container_width=True):
            st.caption("Lägg till efter appens adress:")
            st.code(session.share_link(), language=None)

    # Sidebar
    with st.sidebar:
        render_sidebar(session)

    # Karta
    render_search(search, session)

    points = session.route.snapshot()
    km, mi = format_distance(session.route.total_distance)
    st.caption(f"{km} km · {mi} mi")

    m = create_map(
        points[0].as_list() if points else DEFAULT_CENTER,
        points,
        session.route.total_distance
    )
    map_state = st_folium(
        m,
        key="map",
        width=None,
        height=600,
        returned_objects=["last_clicked"]
    )

    event, st.session_state.last_click = click_event(map_state, st.session_state.last_click)
    if event:
        apply_and_sync(session, event)

    # Footer
    st.divider()
    st.markdown(
        """
        <div style='text-align: center; color: gray; font-size: 0.8em;'>
        Byggd med Streamlit + Folium | Kartdata © OpenStreetMap contributors
        </div>
        """,
        unsafe_allow_html=True
    )


if __name__ == "__main__":
    main()

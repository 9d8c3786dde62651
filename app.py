import logging

import streamlit as st
from canvas_grades.backend_logic import *
from canvas_grades.io_frames import *
from canvas_grades.config import AppConfig, load_config
from canvas_grades.session import GradebookSession

# ------------------------
# Streamlit UI (paste -> edit -> calculate)
# ------------------------

config = load_config()
if not config.is_valid():
    config = AppConfig(page_title=config.page_title)
logging.basicConfig(level=config.log_level)

st.set_page_config(
    page_title=config.page_title,
    page_icon="📊",
    layout="wide",
)

DECIMALS = config.display_decimals

# One gradebook per browser session
if "gradebook" not in st.session_state:
    st.session_state["gradebook"] = GradebookSession()
    st.session_state["step"] = 1

gradebook: GradebookSession = st.session_state["gradebook"]


def fmt(x: float) -> str:
    return f"{round_half_up(x, DECIMALS):.{DECIMALS}f}"


def describe_outcome(outcome: GoalOutcome):
    """(streamlit message function, text) for a solver outcome."""
    if outcome.kind == "invalid_points":
        return st.warning, "Please enter a valid number of points for the assignment."
    if outcome.kind == "invalid_target":
        return st.warning, "Please enter a target grade percentage."
    if outcome.kind == "no_category_selected":
        return st.warning, "Please select a category."
    if outcome.kind == "zero_weight_category":
        return st.warning, "Selected category has zero weight."
    if outcome.kind == "already_met":
        return st.success, "Target already met; no points needed."
    if outcome.kind == "unreachable":
        return st.error, (
            f"It is not possible to reach {fmt(outcome.target_percent)}% overall "
            f"with this assignment in the {outcome.category_name} category."
        )
    return st.info, (
        f"You need approximately **{fmt(outcome.points)} points** "
        f"({fmt(outcome.percentage_of_max)}%) on this assignment."
    )


# ------------------------
# Callbacks
# ------------------------

def handle_parse():
    gradebook.load_text(
        st.session_state.get("assignments_text", ""),
        st.session_state.get("grades_text", ""),
    )
    st.session_state.pop("goal_outcome", None)
    st.session_state["step"] = 2


def handle_back():
    gradebook.reset()
    st.session_state["assignments_text"] = ""
    st.session_state["grades_text"] = ""
    for key in ("calc_total_points", "calc_target", "calc_category", "goal_outcome"):
        st.session_state.pop(key, None)
    st.session_state["step"] = 1


def handle_category_edit(category_id: int):
    gradebook.update_category(
        category_id,
        name=st.session_state[f"cat_name_{category_id}"],
        weight=st.session_state[f"cat_weight_{category_id}"],
    )


def handle_assignment_edit(category_id: int, assignment_id: int):
    gradebook.update_assignment(
        category_id,
        assignment_id,
        name=st.session_state[f"a_name_{assignment_id}"],
        points_earned=st.session_state[f"a_earned_{assignment_id}"],
        points_possible=st.session_state[f"a_possible_{assignment_id}"],
    )


def handle_calculate():
    outcome = gradebook.solve(
        st.session_state.get("calc_target"),
        st.session_state.get("calc_category"),
        st.session_state.get("calc_total_points"),
    )
    st.session_state["goal_outcome"] = outcome


st.title("📊 Canvas Grade Calculator")
st.write(
    "Paste the assignments page of a course, check the categories and weights, "
    "and find out what you need on the next assignment to reach your target grade."
)

# ------------------------
# Step 1: paste
# ------------------------

if st.session_state["step"] == 1:
    st.subheader("1. Paste your assignments")
    st.markdown(
        "Category headers look like **Exams (30%)**, assignments like **Quiz 1 8/10**. "
        "Assignments that are not graded yet can be entered as **Project /50**."
    )

    col_assignments, col_grades = st.columns(2)
    with col_assignments:
        st.text_area("Assignments", key="assignments_text", height=300)
    with col_grades:
        st.text_area("Grades (optional)", key="grades_text", height=300)

    st.button("Parse", type="primary", on_click=handle_parse)

# ------------------------
# Step 2: edit + calculate
# ------------------------

else:
    st.subheader("2. Check your categories")

    for category in gradebook.categories:
        with st.container(border=True):
            c1, c2, c3 = st.columns([6, 2, 1])
            with c1:
                st.text_input(
                    "Category",
                    value=category.name,
                    key=f"cat_name_{category.id}",
                    on_change=handle_category_edit,
                    args=(category.id,),
                )
            with c2:
                st.number_input(
                    "Weight (%)",
                    value=float(category.weight),
                    step=0.1,
                    key=f"cat_weight_{category.id}",
                    on_change=handle_category_edit,
                    args=(category.id,),
                )
            with c3:
                st.button(
                    "✕",
                    key=f"del_cat_{category.id}",
                    help="Delete category",
                    on_click=gradebook.remove_category,
                    args=(category.id,),
                )

            for assignment in category.assignments:
                a1, a2, a3, a4 = st.columns([6, 2, 2, 1])
                edit_args = (category.id, assignment.id)
                with a1:
                    st.text_input(
                        "Assignment",
                        value=assignment.name,
                        key=f"a_name_{assignment.id}",
                        on_change=handle_assignment_edit,
                        args=edit_args,
                        label_visibility="collapsed",
                    )
                with a2:
                    st.number_input(
                        "Earned",
                        value=float(assignment.points_earned),
                        key=f"a_earned_{assignment.id}",
                        on_change=handle_assignment_edit,
                        args=edit_args,
                        label_visibility="collapsed",
                    )
                with a3:
                    st.number_input(
                        "Possible",
                        value=float(assignment.points_possible),
                        key=f"a_possible_{assignment.id}",
                        on_change=handle_assignment_edit,
                        args=edit_args,
                        label_visibility="collapsed",
                    )
                with a4:
                    st.button(
                        "✕",
                        key=f"del_a_{assignment.id}",
                        help="Delete assignment",
                        on_click=gradebook.remove_assignment,
                        args=edit_args,
                    )

            st.button(
                "Add assignment",
                key=f"add_a_{category.id}",
                on_click=gradebook.add_assignment,
                args=(category.id,),
            )

    st.button("Add category", on_click=gradebook.add_category)

    st.markdown("---")
    st.subheader("Current grade")

    m1, m2 = st.columns(2)
    with m1:
        st.metric("Overall grade", f"{fmt(gradebook.overall_grade())}%")
    with m2:
        st.metric("Total weighting", f"{fmt(gradebook.total_weight())}%")

    if abs(gradebook.total_weight() - 100) > 0.01:
        st.caption("Weights do not add up to 100%, so the overall grade will not top out at 100%.")

    st.dataframe(
        summary_frame(gradebook.categories),
        hide_index=True,
        use_container_width=True,
        column_config={
            "Average %": st.column_config.NumberColumn("Average %", format=f"%.{DECIMALS}f"),
        },
    )

    # ------------------------
    # Goal calculator
    # ------------------------

    st.markdown("---")
    st.subheader("3. What do I need on the next assignment?")

    options = category_options(gradebook.categories)
    g1, g2, g3 = st.columns(3)
    with g1:
        st.number_input("Assignment total points", value=None, min_value=0.0, key="calc_total_points")
    with g2:
        st.number_input("Target overall grade (%)", value=config.default_target, key="calc_target")
    with g3:
        st.selectbox(
            "Category",
            [None] + list(options.keys()),
            format_func=lambda cid: "-- select --" if cid is None else options.get(cid, f"Category {cid}"),
            key="calc_category",
        )

    st.button("Calculate", type="primary", on_click=handle_calculate)

    if "goal_outcome" in st.session_state:
        outcome = st.session_state["goal_outcome"]
        show, message = describe_outcome(outcome)
        show(message)

        if outcome.kind == "required":
            after = projected_grade(
                gradebook.categories,
                outcome.category_id,
                outcome.points,
                outcome.max_points,
            )
            if after is not None:
                st.caption(f"Scoring that would put your overall grade at {fmt(after)}%.")

    st.markdown("---")
    st.button("Back", on_click=handle_back)


st.header("FAQ")

st.subheader("How is the overall grade calculated?")
st.write(
    "Each category's average is its total points earned divided by its total points possible. "
    "The overall grade is the sum of each average multiplied by the category weight. "
    "A category with no points possible yet counts as 0%."
)

st.subheader("What data do you collect or store?")
st.write(
    "Nothing. The text you paste is processed in your browser session only "
    "and is cleared when you refresh or close the page."
)

st.subheader("Does this match what my course will report?")
st.write(
    "Not necessarily. This calculator is for planning only; it is not connected to Canvas "
    "and does not know about dropped scores, extra credit rules or late penalties."
)

"""Shared narrative widgets: concept boxes, grammar steps, quizzes, navigation."""
import streamlit as st

from workshop.config import configure_logging
from workshop.constants import PART_TITLES


def chapter_header(number, title, part=None):
    """Render a chapter header with its part label."""
    configure_logging()
    if part:
        st.caption(f"Part {part}: {PART_TITLES.get(part, '')}")
    st.title(f"Chapter {number}: {title}")
    st.divider()


def concept_box(title, content):
    """Render a highlighted concept box."""
    st.markdown(f"""
<div style="background-color: #F4F6F7; padding: 18px; border-radius: 8px; border-left: 5px solid #1B4F72; margin: 10px 0;">
<h4 style="color: #1B4F72; margin-top: 0;">{title}</h4>
<p style="color: #17202A;">{content}</p>
</div>
""", unsafe_allow_html=True)


def insight_box(text):
    st.info(f"**What to notice:** {text}")


def warning_box(text):
    st.warning(f"**Common pitfall:** {text}")


def code_example(code, expanded=False, label="Show Code"):
    """Render the code behind a chart in a collapsible block."""
    with st.expander(label, expanded=expanded):
        st.code(code.strip(), language="python")


def grammar_step(number, component, description, code=None):
    """One step of an incrementally built chart: which grammar component it adds."""
    st.markdown(f"#### Step {number}: {component}")
    st.markdown(description)
    if code:
        st.code(code.strip(), language="python")


def quiz(question, options, correct_idx, explanation="", key="quiz"):
    """Render a multiple-choice question. Returns True/False once answered, else None."""
    st.subheader("Check Yourself")
    answer = st.radio(question, options, key=key, index=None)
    if answer is None:
        return None
    correct = options.index(answer) == correct_idx
    if correct:
        st.success("Correct!")
    else:
        st.error(f"Not quite. The answer is: **{options[correct_idx]}**")
    if explanation:
        st.caption(explanation)
    return correct


def takeaways(points):
    st.subheader("Takeaways")
    for p in points:
        st.markdown(f"- {p}")


def navigation(prev_label=None, next_label=None, prev_page=None, next_page=None):
    """Render prev/next chapter links."""
    col1, _, col3 = st.columns([1, 2, 1])
    with col1:
        if prev_label:
            st.page_link(prev_page if prev_page == "app.py" else f"pages/{prev_page}",
                         label=f"← {prev_label}")
    with col3:
        if next_label:
            st.page_link(f"pages/{next_page}", label=f"{next_label} →")

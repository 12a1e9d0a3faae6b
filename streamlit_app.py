import streamlit as st

from config.app_config import get_config
from infrastructure.transport.errors import ApiError, ControllerStateError
from services.app_context import AppContext, build_app_context
from services.notifications import StreamlitNotifier
from utils.async_utils import run_async
from utils.logging_config import initialize_logging, get_logger, log_user_interaction

# Initialize logging and error tracking
error_tracker = initialize_logging()
logger = get_logger(__name__)

config = get_config()

ROUTE_KEY = "app.route"
PAGES = {
    "dialogue": "💬 Dialogue",
    "quiz": "📝 Quiz",
    "records": "📊 Records",
    "words": "🔍 Words",
}


def navigate(route: str):
    st.session_state[ROUTE_KEY] = route


def get_context() -> AppContext:
    """One context per browser session; controller state lives in st.session_state"""
    if "app.context" not in st.session_state:
        st.session_state["app.context"] = build_app_context(
            st.session_state,
            config=config,
            notifier=StreamlitNotifier(),
            navigate=navigate,
        )
    return st.session_state["app.context"]


def run_action(awaitable, controller=None):
    """Run a controller coroutine; failures have already been surfaced as notices"""
    try:
        return run_async(awaitable)
    except ControllerStateError as e:
        st.warning(e.message)
    except ApiError as e:
        logger.info(f"Action failed: {e.kind} - {e.message}")
        if controller is not None and controller.error:
            st.error(controller.error)
    return None


def render_login_page(ctx: AppContext):
    st.title(config.ui.app_title)
    login_tab, register_tab = st.tabs(["🔑 Login", "📝 Register"])

    with login_tab:
        with st.form("login_form"):
            username = st.text_input("👤 Username")
            password = st.text_input("🔒 Password", type="password")
            if st.form_submit_button("🔑 Sign In", type="primary", use_container_width=True):
                if run_action(ctx.auth.login(username, password), ctx.auth) is not None:
                    navigate(config.navigation.home_route)
                    st.rerun()

    with register_tab:
        with st.form("register_form"):
            username = st.text_input("👤 Username", key="register_username")
            email = st.text_input("📧 Email", placeholder="your@email.com")
            password = st.text_input("🔒 Password", type="password", key="register_password")
            if st.form_submit_button("📝 Create Account", type="primary", use_container_width=True):
                success, message = run_async(ctx.auth.register(username, password, email))
                if success:
                    st.success(message)
                else:
                    st.error(message)


def render_dialogue_page(ctx: AppContext):
    dialogue = ctx.dialogue
    st.header(PAGES["dialogue"])

    if not dialogue.scenarios and not dialogue.loading:
        run_action(dialogue.fetch_scenarios(), dialogue)

    if not dialogue.has_active_session:
        options = {s.id: s.name for s in dialogue.scenarios}
        if options:
            scenario_id = st.selectbox("Scenario", list(options), format_func=options.get)
            if st.button("▶️ Start", type="primary"):
                run_action(dialogue.start_session(scenario_id), dialogue)
                st.rerun()
        else:
            st.info("No scenarios available yet.")
        return

    scenario = dialogue.get_scenario_by_id(dialogue.current_session.scenario_id)
    st.caption(scenario.name if scenario else f"Session {dialogue.current_session.id}")

    for message in dialogue.messages:
        with st.chat_message(message.role.value):
            st.markdown(message.content)

    if prompt := st.chat_input("Type your message..."):
        log_user_interaction(logger, "dialogue_message", length=len(prompt))
        run_action(dialogue.send_message(prompt), dialogue)
        st.rerun()

    if st.button("⏹️ End session"):
        run_action(dialogue.end_current_session(), dialogue)
        st.rerun()


def render_quiz_page(ctx: AppContext):
    quiz = ctx.quiz
    st.header(PAGES["quiz"])

    difficulty = st.radio("Difficulty", ["easy", "medium", "hard"], horizontal=True,
                          format_func=quiz.get_difficulty_label)
    if st.button("🎲 Generate quiz", disabled=quiz.loading):
        run_action(quiz.generate_quiz(difficulty), quiz)
        st.rerun()

    for question in quiz.visible_questions():
        qid = question["question_id"]
        current = quiz.get_answer(qid)
        options = question["options"]
        choice = st.radio(
            question["question"], options,
            index=options.index(current) if current in options else None,
            key=quiz.answer_key(qid),
            disabled=not quiz.has_active_quiz,
        )
        if choice is not None and choice != current and quiz.has_active_quiz:
            quiz.set_answer(qid, choice)
        if quiz.quiz_result is not None:
            st.caption(f"Correct answer: {question.get('correct_answer')}")

    if quiz.has_active_quiz:
        st.progress(quiz.answered_count / max(quiz.question_count, 1),
                    text=f"{quiz.answered_count}/{quiz.question_count} answered")
        if st.button("✅ Submit", type="primary", disabled=not quiz.all_questions_answered or quiz.submitting):
            run_action(quiz.submit_quiz(), quiz)
            st.rerun()

    if quiz.quiz_result is not None:
        result = quiz.quiz_result
        st.success(f"Score: {result.user_score}/{result.total_score}")

    with st.expander(f"History ({quiz.history_count})"):
        if st.button("🔄 Refresh history"):
            run_action(quiz.fetch_history())
        for past in quiz.history:
            score = past.user_score if past.user_score is not None else "-"
            st.write(f"{quiz.get_difficulty_label(past.difficulty)} · {score}/{past.total_score}")


def render_records_page(ctx: AppContext):
    records = ctx.records
    st.header(PAGES["records"])

    if not records.has_statistics:
        run_action(records.fetch_statistics())
    if records.statistics is not None:
        stats = records.statistics
        cols = st.columns(4)
        cols[0].metric("Word queries", stats.total_word_queries)
        cols[1].metric("Dialogues", stats.total_dialogue_sessions)
        cols[2].metric("Quizzes", stats.total_quizzes)
        cols[3].metric("Avg. quiz score", f"{stats.average_quiz_score:.1f}")

    filters = [None, "WORD_QUERY", "DIALOGUE", "QUIZ"]
    active = records.active_filter.value if records.active_filter else None
    selected = st.selectbox(
        "Activity", filters, index=filters.index(active),
        format_func=lambda t: "All" if t is None else records.get_activity_type_label(t),
    )
    if selected != active:
        run_action(records.set_filter(selected), records)
    elif not records.has_records and not records.loading and records.error is None:
        run_action(records.fetch_records(), records)

    for record in records.records:
        icon = records.get_activity_type_icon(record.activity_type)
        st.write(f"{icon} {records.get_activity_type_label(record.activity_type)} · {record.activity_time or ''}")

    prev_col, info_col, next_col = st.columns([1, 2, 1])
    if prev_col.button("◀", disabled=records.current_page <= 1):
        run_action(records.go_to_page(records.current_page - 1), records)
        st.rerun()
    info_col.write(f"Page {records.current_page} of {max(records.total_pages, 1)} ({records.total} records)")
    if next_col.button("▶", disabled=not records.has_more_pages):
        run_action(records.go_to_page(records.current_page + 1), records)
        st.rerun()


def render_words_page(ctx: AppContext):
    words = ctx.words
    st.header(PAGES["words"])

    with st.form("word_form"):
        word = st.text_input("Word")
        if st.form_submit_button("🔍 Look up", type="primary") and word.strip():
            run_action(words.query_word(word), words)

    if words.has_current_word:
        current = words.current_word
        st.subheader(current.word)
        if current.pronunciation:
            st.caption(current.pronunciation)
        st.write(current.translation)
        st.write(current.definition)

    with st.expander(f"History ({words.history_count})"):
        for entry in words.history:
            st.write(f"{entry.word} → {entry.translation}")


def main_app(ctx: AppContext):
    with st.sidebar:
        user = ctx.auth.user
        st.write(f"👤 {user.username}" if user else "👤 Signed in")
        route = st.session_state.get(ROUTE_KEY, config.navigation.home_route)
        if route not in PAGES:
            route = config.navigation.home_route
        route = st.radio("Navigate", list(PAGES), index=list(PAGES).index(route), format_func=PAGES.get)
        navigate(route)
        if st.button("🚪 Logout", use_container_width=True):
            run_async(ctx.auth.logout())
            ctx.reset_user_state()
            navigate(config.navigation.login_route)
            st.rerun()
        if config.debug:
            with st.expander("🐞 Error summary"):
                st.json(error_tracker.get_error_summary())

    renderers = {
        "dialogue": render_dialogue_page,
        "quiz": render_quiz_page,
        "records": render_records_page,
        "words": render_words_page,
    }
    renderers[route](ctx)


st.set_page_config(page_title=config.ui.app_title, page_icon="🗣️")
context = get_context()

if not context.auth.is_authenticated or st.session_state.get(ROUTE_KEY) == config.navigation.login_route:
    if context.auth.is_authenticated:
        navigate(config.navigation.home_route)
        st.rerun()
    render_login_page(context)
else:
    main_app(context)

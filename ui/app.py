"""Streamlit chat page.

Run with: streamlit run ui/app.py
"""

import streamlit as st

from config import get_settings
from ui.client import ChatApiClient
from ui.session import ChatSession, SubmitState

ROLES = {"user": "user", "ai": "assistant"}

settings = get_settings()

st.set_page_config(page_title="AI Chat", layout="centered")
st.title("AI Chat")

if "chat_session" not in st.session_state:
    st.session_state.chat_session = ChatSession(ChatApiClient())

session: ChatSession = st.session_state.chat_session

for message in session.messages:
    with st.chat_message(ROLES[message.sender]):
        st.markdown(message.text)

if prompt := st.chat_input("Type a message..."):
    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        placeholder = st.empty()

        try:
            if settings.stream_responses:
                received: list[str] = []

                def show_fragment(fragment: str):
                    received.append(fragment)
                    placeholder.markdown("".join(received) + "▌")

                with st.spinner("Thinking..."):
                    result = session.submit_streaming(prompt, on_fragment=show_fragment)
            else:
                with st.spinner("Thinking..."):
                    result = session.submit(prompt)
        finally:
            # Reopened lazily on the next submission
            session.backend.close()

        if result == SubmitState.APPENDED:
            placeholder.markdown(session.messages[-1].text)
        elif result == SubmitState.FAILED:
            placeholder.empty()
            st.error("Could not reach the chat service. Try sending your message again.")

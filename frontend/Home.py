import streamlit as st

from state import init_state
from ui import app_shell, page_header
from api import public_url, upload_image

init_state()
st.set_page_config(page_title="PlateSnap: 음식 사진 업로드", page_icon="🍽️", layout="centered")

app_shell("PlateSnap 🍽️", active="upload")
page_header("이미지 업로드", "📤")

file = st.file_uploader("이미지 선택 (png/jpg/jpeg/webp/gif)", type=["png", "jpg", "jpeg", "webp", "gif"])

if file is not None:
    # 업로드 전 미리보기 (브라우저에 그대로 전달)
    st.image(file, caption=file.name, use_container_width=True)

if st.button("업로드", use_container_width=True, disabled=file is None):
    file_bytes = file.getvalue()
    if not file_bytes:
        st.error("업로드한 파일을 읽지 못했습니다.")
    else:
        with st.spinner("업로드 중..."):
            resp = upload_image(file_bytes, file.name, file.type or "application/octet-stream")

        if "error" in resp:
            st.error(f"업로드 실패: {resp['error']}")
        else:
            url = resp.get("imageUrl") or resp.get("url")
            st.session_state["uploaded_url"] = url
            st.session_state["upload_history"].append(url)
            st.success("업로드 완료!")

uploaded = st.session_state.get("uploaded_url")
if uploaded:
    st.subheader("업로드된 이미지")
    st.image(public_url(uploaded), use_container_width=True)
    st.caption("이미지 URL (오른쪽 아이콘으로 복사)")
    st.code(uploaded, language=None)

history = st.session_state.get("upload_history") or []
if len(history) > 1:
    with st.expander(f"이번 세션 업로드 기록 ({len(history)}개)", expanded=False):
        for url in reversed(history):
            st.code(url, language=None)

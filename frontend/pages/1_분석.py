import streamlit as st

from state import init_state
from ui import app_shell, page_header, show_json, food_item_card
from api import analyze_image, public_url

init_state()
st.set_page_config(page_title="PlateSnap: 음식 분석", page_icon="🔎", layout="centered")

app_shell("PlateSnap 🍽️", active="analyze")
page_header("음식 분석", "🔎")

st.markdown(
    "<p class='caption'>분석할 이미지 URL을 입력하세요. 업로드 화면에서 받은 /uploads/... 경로도 사용할 수 있습니다.</p>",
    unsafe_allow_html=True,
)

default_url = st.session_state.get("uploaded_url") or ""
with st.form("analyze_form", clear_on_submit=False):
    image_url = st.text_input("이미지 URL", value=public_url(default_url) if default_url else "")
    submit = st.form_submit_button("분석하기", use_container_width=True)

if submit:
    if not image_url.strip():
        st.error("이미지 URL을 입력하세요.")
    else:
        with st.spinner("Gemini로 분석 중..."):
            resp = analyze_image(image_url.strip())
        st.session_state["last_analysis"] = resp

result = st.session_state.get("last_analysis")
if result:
    if "error" in result:
        st.error(f"분석 실패: {result['error']}")
    else:
        items = result.get("items") or []
        st.subheader(f"🔎 인식된 음식 {len(items)}개")
        if not items:
            st.info("인식된 음식이 없습니다.")
        for it in items:
            food_item_card(it.get("name", ""), it.get("estimatedGrams"))

        known = [it["estimatedGrams"] for it in items if it.get("estimatedGrams") is not None]
        if known:
            st.metric("총 추정 중량(g)", f"{sum(known):g}")
        show_json(result)

import gradio as gr
from curio.core.errors import CurioError
from curio.core.learning_service import LearningService
from curio.dialogue.prompts import GREETING
from curio.storage.document_store import initialize_store
from curio.ui.lesson_formatter import format_lesson_plan_markdown, format_request_choices
import logging

logger = logging.getLogger(__name__)


def create_gradio_ui(service: LearningService = None):
    if service is None:
        service = LearningService(initialize_store())

    async def chat_handler(msg, hist, request: gr.Request):
        """Handler for Chat tab - returns only the answer string."""
        if not msg or not msg.strip():
            return GREETING
        session_id = request.session_hash if request else "default"
        try:
            result = await service.send_message(session_id, msg)
        except CurioError as e:
            logger.error(f"Dialogue turn failed: {e}")
            return f"❌ Error: {str(e)}"

        answer = result["response"]
        if result["learning_request"] is not None:
            answer += "\n\n📚 Saved to your topics. Open the **Topics** tab to generate a lesson plan."
        return answer

    async def clear_chat_handler(request: gr.Request):
        """Start the dialogue over when the chat is cleared."""
        if request:
            await service.reset_session(request.session_hash)

    async def refresh_topics(selected_id=None):
        requests = await service.list_learning_requests()
        choices = format_request_choices(requests)
        ids = [value for _, value in choices]
        value = selected_id if selected_id in ids else (ids[-1] if ids else None)
        return gr.update(choices=choices, value=value)

    async def show_topic(learning_request_id):
        if not learning_request_id:
            return format_lesson_plan_markdown(None, None)
        request = await service.store.learning_requests.get(learning_request_id)
        plan = await service.get_lesson_plan_for_request(learning_request_id) if request else None
        return format_lesson_plan_markdown(request, plan)

    async def generate_handler(learning_request_id):
        if not learning_request_id:
            gr.Warning("Select a topic first.")
            return format_lesson_plan_markdown(None, None)
        try:
            result = await service.generate_lesson_plan(learning_request_id)
        except CurioError as e:
            logger.error(f"Lesson plan generation failed: {e}")
            gr.Warning(f"Lesson plan generation failed: {e}")
            return await show_topic(learning_request_id)

        if result["error"]:
            gr.Warning(result["error"])
        else:
            gr.Info(f"✅ Curated {len(result['curated_plan'])} resources")
        return await show_topic(learning_request_id)

    async def delete_handler(learning_request_id):
        if learning_request_id:
            try:
                await service.delete_learning_request(learning_request_id)
                gr.Info("🗑️ Topic deleted")
            except CurioError as e:
                gr.Warning(f"Delete failed: {e}")
        return await refresh_topics(), format_lesson_plan_markdown(None, None)

    async def remove_handler(learning_request_id, position):
        plan = await service.get_lesson_plan_for_request(learning_request_id) if learning_request_id else None
        if plan is None:
            gr.Warning("This topic has no lesson plan yet.")
            return None, await show_topic(learning_request_id)
        index = int(position or 0) - 1
        try:
            removed = await service.remove_resource(plan.id, index)
        except IndexError:
            gr.Warning(f"There is no resource #{int(position or 0)}.")
            return None, await show_topic(learning_request_id)
        gr.Info(f"Removed \"{removed.title}\". Click Undo to put it back.")
        return (plan.id, index, removed), await show_topic(learning_request_id)

    async def undo_handler(learning_request_id, last_removed):
        if last_removed:
            plan_id, index, resource = last_removed
            try:
                await service.restore_resource(plan_id, index, resource)
            except CurioError as e:
                gr.Warning(f"Undo failed: {e}")
        return None, await show_topic(learning_request_id)

    with gr.Blocks(title="Curio") as demo:

        with gr.Tab("💬 Chat"):
            chatbot = gr.Chatbot(
                height=600,
                placeholder=f"💭 {GREETING}",
                show_label=False,
                layout="bubble",
            )
            chatbot.clear(clear_chat_handler)

            gr.ChatInterface(fn=chat_handler, chatbot=chatbot)

        with gr.Tab("📚 Topics"):
            with gr.Row():
                topic_select = gr.Dropdown(label="Topic", choices=[], interactive=True, scale=3)
                refresh_btn = gr.Button("Refresh", size="md", scale=1)
            lesson_display = gr.Markdown(value=format_lesson_plan_markdown(None, None))
            with gr.Row():
                generate_btn = gr.Button("✨ Generate lesson plan", variant="primary")
                delete_btn = gr.Button("Delete topic", variant="stop")
            with gr.Row():
                resource_number = gr.Number(label="Resource #", value=1, precision=0, minimum=1)
                remove_btn = gr.Button("Remove resource")
                undo_btn = gr.Button("Undo")
            last_removed = gr.State(None)

            refresh_btn.click(refresh_topics, [topic_select], topic_select)
            topic_select.change(show_topic, [topic_select], lesson_display)
            generate_btn.click(generate_handler, [topic_select], lesson_display, show_progress="full")
            delete_btn.click(delete_handler, [topic_select], [topic_select, lesson_display])
            remove_btn.click(remove_handler, [topic_select, resource_number], [last_removed, lesson_display])
            undo_btn.click(undo_handler, [topic_select, last_removed], [last_removed, lesson_display])
            demo.load(refresh_topics, None, topic_select)

    return demo

# prompts for the Cognito/Muse discussion

class DiscussionPrompts():
    """
    Role headers, turn instructions and the shared notepad template for the two-agent discussion.
    Templates are filled with str.format(); literal braces are doubled.
    """

    # role headers, also sent as the system instruction of every call
    cognito_system_header = "You are Cognito, a highly logical AI."
    muse_system_header = "You are Muse, a highly creative AI."

    # notepad update wire syntax, matched by the last occurrence of each marker
    notepad_update_tag_start = "<notepad_update>"
    notepad_update_tag_end = "</notepad_update>"

    initial_notepad_content = """This is a shared notepad.
Cognito and Muse can use it together to record ideas, drafts or key points.

Guidelines:
- The AI agents update this notepad by including a dedicated instruction in their replies.
- The notepad content is included in every later prompt sent to the agents.

Initial state: empty."""

    notepad_instruction_template = """
You also have access to a shared notepad.
Current Notepad Content:
---
{notepad_content}
---
Instructions for Notepad:
1. To update the notepad, include a section at the very end of your response, formatted exactly as:
   <notepad_update>
   [YOUR NEW FULL NOTEPAD CONTENT HERE. THIS WILL REPLACE THE ENTIRE CURRENT NOTEPAD CONTENT.]
   </notepad_update>
2. If you do not want to change the notepad, do NOT include the <notepad_update> section at all. Omitting it leaves the notepad unchanged.
3. Your primary spoken response to the ongoing discussion should come BEFORE any <notepad_update> section. Ensure you still provide a spoken response.
"""

    image_note = "The user also provided an image. Consider both the image and the text query in your analysis and reply."

    opening_template = (
        "{header} The user's query is: \"{user_query}\". {image_note} "
        "Your task is to discuss this query with {opponent} (a creative AI). "
        "Formulate your opening statement or question to {opponent} to start the discussion. "
        "Keep your reply concise.\n{notepad_block}"
    )

    reply_template = (
        "{header} The user's query is: \"{user_query}\". {image_note} "
        "Current discussion:\n{transcript}\n"
        "{opponent} ({opponent_description}) just said: \"{last_utterance}\". "
        "Reply to {opponent} and continue the discussion. Keep your reply concise.\n{notepad_block}"
    )

    synthesis_template = (
        "{header} The user's original query was: \"{user_query}\". {image_note} "
        "You ({speaker}) and {opponent} had the following discussion:\n{transcript}\n"
        "Based on the entire exchange and the final state of the shared notepad, synthesize all key points "
        "and write a comprehensive, helpful final answer for the user. Reply directly to the user, not to {opponent}. "
        "Make the answer well structured and easy to follow. You may refer to the notepad if relevant. "
        "If you think it is necessary, you may update the notepad one last time using the standard notepad update instructions.\n"
        "{notepad_block}"
    )

    # advisory status lines appended before each model call
    opening_advisory = "{speaker} is preparing an opening point for {opponent} (using {model_name})..."
    reply_advisory = "{speaker} is replying to {opponent} (using {model_name})..."
    synthesis_advisory = "{speaker} is synthesizing the discussion into a final answer (using {model_name})..."

    # spoken-text placeholders used by the response parser
    silent_notepad_update_placeholder = "(The AI updated the notepad.)"
    malformed_notepad_update_placeholder = "(The AI tried to update the notepad, but the update was empty.)"

    # session notices
    welcome_notice = (
        "Welcome to Dual AI Chat! Enter your question or upload an image. "
        "{cognito} and {muse} will discuss it, possibly using the shared notepad, "
        "and then {cognito} will reply to you. Current model: {model_name}"
    )
    missing_api_key_notice = (
        "CRITICAL: GOOGLE_GENAI_API_KEY is not configured. "
        "Set the GOOGLE_GENAI_API_KEY environment variable so the application can work."
    )
    invalid_credentials_error = (
        "Error: {error_text} Please check your API key configuration. The chat may not work correctly."
    )
    invocation_error = "Error: {error_text}"
    image_conversion_error = "Image processing failed, please try again."

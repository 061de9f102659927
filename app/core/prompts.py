from app.models.schemas import VideoType


type_prompts = {
    VideoType.ACADEMIC_LECTURE: """You are an expert academic note-taker. Create comprehensive lecture notes suitable for university students. Include:
- Key concepts and definitions
- Theories and frameworks discussed
- Examples and case studies
- Important dates, names, and citations
- Potential exam topics
- Questions for further study""",
    VideoType.TUTORIAL: """You are an expert technical writer. Create step-by-step tutorial notes. Include:
- Prerequisites and requirements
- Step-by-step instructions
- Code snippets or commands if applicable
- Common pitfalls and troubleshooting tips
- Best practices
- Resources for further learning""",
    VideoType.MOTIVATIONAL: """You are an inspirational content summarizer. Create uplifting and actionable notes. Include:
- Core message and theme
- Key quotes and memorable moments
- Action items and takeaways
- Personal reflection prompts
- Related resources or books mentioned""",
    VideoType.REVIEW_SESSION: """You are an exam prep specialist. Create revision-focused notes. Include:
- Main topics covered
- Key formulas, definitions, or concepts
- Practice questions or problems
- Memory aids and mnemonics
- Areas that need more review
- Exam tips mentioned""",
    VideoType.QA_FORMAT: """You are a Q&A summarizer. Create organized Q&A notes. Include:
- List of questions asked
- Detailed answers provided
- Follow-up points discussed
- Unanswered questions for research
- Key insights from the discussion""",
    VideoType.GENERAL: """You are a comprehensive note-taker. Create well-organized notes covering all important aspects of the video.""",
}

notes_system_suffix = """
Create comprehensive notes from YouTube video content. Be thorough but concise.
Only include information that is actually present in the material you are given.
Respond by calling the create_notes function. If you cannot call it, reply with a single JSON object with the keys title, summary, keyPoints and sections, and nothing else."""

notes_user_template = """Video: "{title}"
Type: {video_type}
Duration: {duration}

{content_label}:
{content}

Create comprehensive notes based on this material. Use the bracketed [m:ss] markers for section timestamps where they are available, otherwise leave the timestamp empty."""

chunk_system_template = """You are summarizing part {index} of {total} of a YouTube video transcript ("{title}").
Summarize ONLY what is present in this part. Do not guess about other parts of the video and do not add outside knowledge.
Keep the bracketed [m:ss] timestamps next to the points they belong to.
Respond by calling the summarize_chunk function. If you cannot call it, reply with a single JSON object with the keys chunkSummary and chunkKeyPoints, and nothing else."""

chunk_user_template = """TRANSCRIPT PART {index} OF {total}:
{content}"""


NOTES_TOOL = {
    "type": "function",
    "function": {
        "name": "create_notes",
        "description": "Create structured notes from video content",
        "parameters": {
            "type": "object",
            "properties": {
                "title": {
                    "type": "string",
                    "description": "Clear, descriptive title based on video content",
                },
                "summary": {
                    "type": "string",
                    "description": "Comprehensive 2-3 paragraph summary of the video content",
                },
                "keyPoints": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Array of 5-7 major takeaways with specific details",
                },
                "sections": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string", "description": "Section title"},
                            "timestamp": {"type": "string", "description": "Timestamp like 0:00 or 1:30"},
                            "content": {"type": "string", "description": "Detailed content for this section (50-100 words)"},
                        },
                        "required": ["title", "timestamp", "content"],
                        "additionalProperties": False,
                    },
                    "description": "Array of 5-8 sections covering the video content",
                },
            },
            "required": ["title", "summary", "keyPoints", "sections"],
            "additionalProperties": False,
        },
    },
}

CHUNK_TOOL = {
    "type": "function",
    "function": {
        "name": "summarize_chunk",
        "description": "Summarize one part of a long transcript",
        "parameters": {
            "type": "object",
            "properties": {
                "chunkSummary": {
                    "type": "string",
                    "description": "Detailed summary of this part only, keeping timestamps",
                },
                "chunkKeyPoints": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "The most important points made in this part",
                },
            },
            "required": ["chunkSummary", "chunkKeyPoints"],
            "additionalProperties": False,
        },
    },
}

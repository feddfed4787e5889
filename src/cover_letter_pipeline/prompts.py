"""Prompt texts and assembly for cover letter generation."""

from dataclasses import dataclass
from textwrap import dedent

DEFAULT_WORD_LIMIT = 350

ROLE = (
    "You are a cover letter generator. "
    "Your task is to create conversational and concise cover letters."
)

TASK_TEMPLATE = """\
The user content will be a job description.

To compose a compelling cover letter, you must scrutinise the job description for key \
qualifications. Begin with a succinct introduction about the candidate's identity and career \
goals. Highlight skills aligned with the job, underpinned by tangible examples. Incorporate \
details about the company, emphasising its mission or unique aspects that align with the \
candidate's values. Conclude by reaffirming the candidate's suitability, inviting further \
discussion. Use job-specific terminology for a tailored and impactful letter, maintaining a \
professional style suitable for the job role. Please provide your response in under \
{word_limit} words.

Format a cover letter for the candidate in the following structure:

Dear [target audience],

cover letter content

All the Best,
{signature}"""

RULES = dedent("""\
    1. Output format should be in markdown formatted left justified, single spaced with 2 lines between paragraphs and after the salutation. Like a letter
    2. It should not include ANY additional content than the cover letter itself
    3. Don't lie or make up any experience to better fit the job description, only use the experience listed and what can be logically inferred from that experience
    4. Don't directly quote anything from the job description. If you want to tie a link between experience and job requirements, change the wording enough so it is not a direct pull""")


@dataclass(frozen=True)
class Signature:
    """Contact block used to close the letter."""
    name: str = "[Your Name]"
    phone: str = "[Phone]"
    email: str = "[Email]"

    def render(self) -> str:
        return "\n".join(line for line in (self.name, self.phone, self.email) if line)


def render_task(signature: Signature = Signature(), word_limit: int = DEFAULT_WORD_LIMIT) -> str:
    """Fill the task instructions with the signature block and word limit."""
    return TASK_TEMPLATE.format(word_limit=word_limit, signature=signature.render())


DEFAULT_TASK = render_task()


def build_prompt(
    job_description: str,
    resume_text: str,
    task: str = DEFAULT_TASK,
    role: str = ROLE,
    rules: str = RULES,
) -> str:
    """Assemble the full instruction string sent to the model.

    Blocks appear in a fixed order: role, task, job description, resume,
    rules. Callers are expected to have validated that the job description
    and resume text are non-empty.

    Args:
        job_description: Caller-supplied job description
        resume_text: Plain text extracted from the resume
        task: Task instructions (see ``render_task``)
        role: Role description for the model
        rules: Formatting and honesty rules

    Returns:
        The assembled prompt
    """
    sections = [
        role,
        task,
        f"Job Description:\n{job_description}",
        f"Resume:\n{resume_text}",
        f"Rules:\n{rules}",
    ]
    return "\n\n".join(sections) + "\n"

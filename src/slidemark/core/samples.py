"""Sample markdown catalog: one document per slide archetype, used as golden fixtures"""

from types import MappingProxyType
from typing import Optional


SAMPLE_TITLE_SLIDE = """\
# Presentation Title

This is the subtitle. It sums up the core message in a single line.

Presenter: Jane Doe
Date: January 15, 2024"""

SAMPLE_CARD_GRID_2_COLS = """\
## Key Features

- **Fast generation**: Slides created automatically with AI
- **Rich templates**: More than 50 premium templates"""

SAMPLE_CARD_GRID_3_COLS = """\
## Highlights

- **Easy to use**: Beautiful slides from nothing but markdown
- **Many formats**: Export to PDF, PPTX, HTML and more
- **Live collaboration**: Edit together with your team in real time"""

SAMPLE_CARD_GRID_4_COLS = """\
## Product Roadmap

- **Q1**: Core features and MVP launch
- **Q2**: Act on user feedback
- **Q3**: Premium features
- **Q4**: Global expansion"""

SAMPLE_COMPARISON_SLIDE = """\
## Manual vs Automated

### Manual

- Build every slide by hand
- Hours of formatting work

### Automated

- AI drafts the whole deck
- Done in seconds"""

SAMPLE_TIMELINE_SLIDE = """\
## Development Process

1. **Planning**: Requirements analysis and design
2. **Development**: Build the core features
3. **Testing**: QA and bug fixing
4. **Release**: Deploy to production
5. **Monitoring**: Track performance and improve"""

SAMPLE_QUOTE_SLIDE = """\
> "A good presentation makes an idea clear
> and moves the audience to act."
>
> — Steve Jobs"""

SAMPLE_TABLE_SLIDE = """\
## Pricing

| Feature | Free | Pro | Enterprise |
|---------|:----:|:---:|-----------:|
| Slides | 10/month | Unlimited | Unlimited |
| Templates | 5 | 50 | 100+ |
| Seats | 1 | 5 | Unlimited |
| Price | Free | $9/month | Contact us |"""

SAMPLE_COMPREHENSIVE = """\
# Slide SaaS

AI-powered slide generation platform

Presenter: Dev Team
Date: January 2024

---

## The Problem

What slows teams down today:

- **Time**: Four to six hours per deck
- **Design**: Requires a designer's eye
- **Repetition**: The same layout work every time

---

## Our Solution

- **AI generation**: Paste content and get slides back
- **Smart templates**: The right layout picked for you
- **Live editing**: Adjust any generated slide instantly

---

## Old Way vs Our Way

- **Old way**: manual work, 4-6 hours, design skills required
- **Our way**: AI generation, under 5 minutes, anyone can do it

---

## How It Works

1. Add content (URL, PDF, markdown)
2. AI builds the slide structure
3. Pick and customize a template
4. Export (PDF, PPTX, HTML)

---

> "Since we adopted this tool our deck prep time dropped by 90%."
>
> — Chris Kim, Head of Marketing

---

## Pricing Plans

| Plan | Slides per month | Price |
|------|------------------|-------|
| Free | 10 | $0 |
| Pro | 100 | $9 |
| Business | Unlimited | $29 |

---

## Get Started

- **Sign up**: 30-day free trial
- **Watch the demo**: A five minute video guide
- **Talk to us**: One-on-one onboarding"""

SAMPLE_PROCESS_STEPS = """\
## How Slides Are Generated

1. **Step 1 - Input**: Paste a URL, a PDF, or markdown text
2. **Step 2 - Analysis**: AI reads the content structure
3. **Step 3 - Generation**: Content becomes the right slide types
4. **Step 4 - Editing**: Fine-tune the details
5. **Step 5 - Export**: Download in the format you need"""

SAMPLE_DESCRIPTIVE_LIST = """\
## Tech Stack

- **Frontend**: Next.js, React, TypeScript, Tailwind CSS
- **Backend**: Node.js, tRPC, Prisma, PostgreSQL
- **AI**: Content processing with the GLM-5 API
- **Infrastructure**: Vercel, Redis, BullMQ"""


ALL_SAMPLES = MappingProxyType({
    "title_slide": SAMPLE_TITLE_SLIDE,
    "card_grid_2_cols": SAMPLE_CARD_GRID_2_COLS,
    "card_grid_3_cols": SAMPLE_CARD_GRID_3_COLS,
    "card_grid_4_cols": SAMPLE_CARD_GRID_4_COLS,
    "comparison_slide": SAMPLE_COMPARISON_SLIDE,
    "timeline_slide": SAMPLE_TIMELINE_SLIDE,
    "quote_slide": SAMPLE_QUOTE_SLIDE,
    "table_slide": SAMPLE_TABLE_SLIDE,
    "comprehensive": SAMPLE_COMPREHENSIVE,
    "process_steps": SAMPLE_PROCESS_STEPS,
    "descriptive_list": SAMPLE_DESCRIPTIVE_LIST,
})


def get_sample_by_type(name: str) -> Optional[str]:
    return ALL_SAMPLES.get(name)


def get_sample_names() -> list[str]:
    return list(ALL_SAMPLES)

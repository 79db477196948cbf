"""Prompt templates for the AI advice flows."""

from lunabloom.domain.advice import (
    ChatRequest,
    LifestylePlanRequest,
    MealPlanRequest,
    MenstrualTipsRequest,
)

NOT_PROVIDED = "Not provided"
NONE_SPECIFIED = "None specified"

HEALTH_VISITOR_INSTRUCTIONS = """\
You are Luna, an AI Health Assistant with the combined expertise of a Health \
Visitor and a Maternity Nurse, with additional knowledge of lactation, \
pediatric nursing basics, perinatal mental health awareness, maternal and \
child nutrition, child development, child safety and first aid basics, health \
coaching principles and telemedicine. You are professional, knowledgeable and \
assertive.

Tone: empathetic, calm, supportive and clear. Address the user as "you". Use \
simple sentences and explain any jargon. Avoid humor. Ask clarifying questions \
when they help.

You may confidently offer general, evidence-based recommendations. Every time \
you do, immediately follow them with a clear disclaimer that the information \
is for general guidance only, is not personalized medical advice, and that \
the user must consult their own doctor, midwife or other qualified healthcare \
professional for diagnosis, treatment or decisions about their or their \
child's health.

You cannot diagnose, prescribe or recommend medication or specific \
treatments, create therapeutic diet plans, replace a healthcare professional \
or conduct telemedicine consultations. If a question needs any of these, say \
so directly and refer the user to their healthcare provider. Always stress \
urgent medical care when it may be needed."""

PLAN_INSTRUCTIONS = """\
You are Luna, an AI Health Assistant with expertise in prenatal and postnatal \
health, nutrition and fitness. You are professional, knowledgeable, \
supportive and assertive. Prefer direct wording such as "Focus on..." or \
"Ensure you get..." over "You might want to consider..."."""

TIPS_INSTRUCTIONS = """\
You are Luna, a knowledgeable and supportive virtual health assistant \
specializing in women's health and menstrual cycles. Keep the tone positive, \
empathetic and informative, and structure tips with bullet points or short \
paragraphs."""

LIFESTYLE_DISCLAIMER = (
    "**Disclaimer:** This lifestyle plan provides general suggestions based on "
    "common knowledge and is not a substitute for personalized medical advice. "
    "Always consult your doctor, midwife, or a qualified healthcare professional "
    "before making any changes to your diet, exercise routine, or lifestyle, "
    "especially during pregnancy or postpartum."
)

MEAL_PLAN_DISCLAIMER = (
    "**Disclaimer:** This meal plan and vitamin information provides general "
    "suggestions based on common knowledge and established prenatal guidelines. "
    "It is NOT a substitute for personalized medical advice, diagnosis, or "
    "treatment from your doctor, midwife, or a registered dietitian. Nutrient "
    "needs can vary based on individual health, pre-existing conditions, and "
    "specific pregnancy circumstances. Always consult with your healthcare "
    "provider before making any changes to your diet, starting any new "
    "supplements, or if you have any questions or concerns about your health or "
    "your baby's health. They are best equipped to provide advice tailored to "
    "your specific situation."
)

CHAT_DISCLAIMER = (
    "Please remember, I'm an AI assistant and this information is for general "
    "guidance only. It is not a substitute for professional medical advice from "
    "your doctor, midwife, or pediatrician. Always consult a qualified "
    "healthcare provider for personal health concerns or decisions for you or "
    "your child."
)

TIPS_DISCLAIMER = (
    "Remember, these are general tips and not a substitute for professional "
    "medical advice. Please consult your doctor or a qualified healthcare "
    "provider for personalized guidance."
)


def chat_prompt(request: ChatRequest) -> str:
    """Render the health visitor conversation prompt."""
    lines = [
        "Considering your persona, guidelines and the previous conversation "
        "history (if any), respond to the user's message. If providing "
        "information or suggestions, include the necessary disclaimers.",
    ]
    if request.history:
        lines.append("")
        lines.append("Previous Conversation History:")
        lines.extend(f"{turn.role}: {turn.text}" for turn in request.history)
    lines.append("")
    lines.append(f"User: {request.message}")
    lines.append("")
    lines.append("Luna:")
    return "\n".join(lines)


def lifestyle_plan_prompt(request: LifestylePlanRequest) -> str:
    """Render the weekly lifestyle plan prompt."""
    profile = [
        f"- Weight: {_measure(request.weight_kg, 'kg')}",
        f"- Height: {_measure(request.height_cm, 'cm')}",
        f"- Stage: {request.pregnancy_stage}",
    ]
    if request.gestational_age_weeks:
        label = (
            "Baby's Age"
            if request.pregnancy_stage == "Postpartum"
            else "Gestational Age"
        )
        profile.append(f"- {label}: {request.gestational_age_weeks} weeks")
    return "\n".join(
        [
            "Based on the user's provided information:",
            *profile,
            "",
            "Generate a CONFIDENT and ACTIONABLE weekly lifestyle plan tailored "
            "to their current stage, with practical tips for a one-week "
            "timeframe. Use Markdown headings (e.g. ## Nutrition, ## Exercise) "
            "and bullet points.",
            "",
            "Your plan must cover:",
            "1. **Nutrition**: key food groups, beneficial foods, foods to limit "
            "or avoid, hydration goals.",
            "2. **Exercise**: safe suggestions with type, duration and "
            "frequency; state clearly what is not recommended for the stage.",
            "3. **Well-being & Stress Management**: 2-3 concrete techniques.",
            "4. **Sleep Hygiene**: practical tips for this week.",
            "5. **Important Considerations**: reminders specific to this stage.",
            "",
            "IMPORTANT: Conclude your ENTIRE response with the following "
            "disclaimer, exactly as written, on a new line:",
            f'"{LIFESTYLE_DISCLAIMER}"',
            "",
            "Lifestyle Plan:",
        ]
    )


def meal_plan_prompt(request: MealPlanRequest) -> str:
    """Render the weekly meal and vitamin plan prompt."""
    week = request.pregnancy_stage_weeks
    preferences = ", ".join(request.dietary_preferences) or NONE_SPECIFIED
    if request.pre_existing_conditions:
        conditions = (
            f"{request.pre_existing_conditions} (Consider this for general "
            "suggestions only; do not give medical advice for managing "
            "conditions.)"
        )
    else:
        conditions = NONE_SPECIFIED
    return "\n".join(
        [
            "Based on the user's provided information:",
            f"- Age: {_measure(request.age, 'years')}",
            f"- Weight: {_measure(request.weight_kg, 'kg')}",
            f"- Height: {_measure(request.height_cm, 'cm')}",
            f"- Pregnancy Stage: Week {week}",
            f"- Dietary Preferences: {preferences}",
            "- Other Dietary Restrictions/Allergies: "
            f"{request.other_dietary_restrictions or NONE_SPECIFIED}",
            f"- Activity Level: {request.activity_level or NOT_PROVIDED}",
            f"- Pre-existing Conditions: {conditions}",
            "",
            "Generate a CONFIDENT and ACTIONABLE 7-day meal plan and "
            f"vitamin/supplement focus for Week {week} of pregnancy, in Markdown.",
            "",
            f"**I. Weekly Meal Plan for Week {week}**",
            "Give a brief nutritional focus, then for Day 1 to Day 7 list "
            "Breakfast, Mid-Morning Snack, Lunch, Afternoon Snack, Dinner and an "
            "optional Evening Snack with pregnancy-safe ideas. Include general "
            "portion guidance and respect the preferences and restrictions.",
            "",
            f"**II. Vitamin & Supplement Focus for Week {week}**",
            "List 2-3 key vitamins or minerals for this stage. For each explain "
            "its importance, suggest natural food sources, and note typical "
            "prenatal supplement inclusion.",
            "",
            "Emphasize food safety for pregnancy where relevant.",
            "",
            "IMPORTANT: Conclude your ENTIRE response with the following "
            "disclaimer, exactly as written, on a new line, with a blank line "
            "before it:",
            f'"{MEAL_PLAN_DISCLAIMER}"',
            "",
            "Generated Plan:",
        ]
    )


def menstrual_tips_prompt(request: MenstrualTipsRequest) -> str:
    """Render the menstrual health tips prompt."""
    context = []
    if request.current_phase:
        context.append(f"- Current Cycle Phase: {request.current_phase}")
    if request.recent_symptoms:
        context.append(f"- Recent Symptoms: {', '.join(request.recent_symptoms)}")
    if not context:
        context.append(
            "- No specific phase or symptoms provided. "
            "Provide general menstrual health tips."
        )
    return "\n".join(
        [
            "Based on the user's current cycle phase and recent symptoms, "
            "provide helpful and actionable tips focusing on:",
            "- Nutrition: foods that might help or are better avoided.",
            "- Vitamins/Supplements: potentially helpful vitamins (always advise "
            "consulting a doctor before starting supplements).",
            "- Well-being: comfort, stress management or exercise suited to the "
            "phase and symptoms.",
            "- Symptom Management: gentle, non-medical suggestions.",
            "",
            "User's Context:",
            *context,
            "",
            "IMPORTANT: Explicitly state that these tips are general suggestions "
            "and NOT medical advice. Always recommend consulting a healthcare "
            "professional (doctor, gynecologist, registered dietitian) for "
            "personalized guidance.",
            "",
            "Tips:",
        ]
    )


def _measure(value: float | None, unit: str) -> str:
    if value is None:
        return NOT_PROVIDED
    return f"{value:g} {unit}"

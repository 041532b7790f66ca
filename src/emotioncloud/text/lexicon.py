"""
Static Emotion Lexicons
=======================

Word lists used by the keyword/emotion extractor. All lists are static and
process-local; nothing here is learned.

    STOPWORDS
        Function words excluded from every ranking.

    ACTION_LEXICON
        Verb-like, emotion-bearing words mapped to a raw tone label. Labels
        are deliberately written the way upstream analyzers emit them
        ("Fear", "Happy", ...) and are normalized downstream.

    SUBJECT_LEXICON
        Noun-like words (people, places, states) mapped to a raw tone label.

    ACTION_SUFFIXES
        Suffixes that mark a repeated non-dictionary word as action-like.
"""

from __future__ import annotations

STOPWORDS: frozenset[str] = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "also", "am",
    "an", "and", "any", "are", "as", "at", "be", "because", "been", "before",
    "being", "below", "between", "both", "but", "by", "can", "could", "did",
    "do", "does", "doing", "down", "during", "each", "even", "ever", "every",
    "few", "for", "from", "further", "get", "got", "had", "has", "have",
    "having", "he", "her", "here", "hers", "herself", "him", "himself", "his",
    "how", "i", "i'm", "i've", "i'd", "i'll", "if", "in", "into", "is", "it",
    "it's", "its", "itself", "just", "let", "like", "may", "me", "might",
    "more", "most", "much", "must", "my", "myself", "no", "nor", "not", "now",
    "of", "off", "on", "once", "one", "only", "or", "other", "our", "ours",
    "ourselves", "out", "over", "own", "really", "same", "shall", "she",
    "should", "so", "some", "still", "such", "than", "that", "that's", "the",
    "their", "theirs", "them", "themselves", "then", "there", "these", "they",
    "this", "those", "through", "to", "too", "under", "until", "up", "us",
    "very", "was", "we", "were", "what", "when", "where", "which", "while",
    "who", "whom", "whose", "why", "will", "with", "would", "yet", "you",
    "your", "yours", "yourself", "yourselves", "don't", "didn't", "can't",
    "won't", "wasn't", "isn't", "aren't", "doesn't", "couldn't", "wouldn't",
    "shouldn't", "there's", "today", "thing", "things", "lot", "way",
})

ACTION_LEXICON: dict[str, str] = {
    # Anxiety / fear
    "anxious": "Anxiety", "worry": "Worry", "worried": "Worry",
    "worrying": "Worry", "fear": "Fear", "feared": "Fear", "afraid": "Fear",
    "scared": "Fear", "panicking": "Panic", "panicked": "Panic",
    "nervous": "Nervous", "racing": "Anxiety", "shaking": "Fear",
    "trembling": "Fear", "dread": "Fear", "dreading": "Fear",
    # Joy
    "happy": "Happy", "enjoy": "Joy", "enjoyed": "Joy", "enjoying": "Joy",
    "laugh": "Joy", "laughed": "Joy", "laughing": "Joy", "smile": "Happy",
    "smiled": "Happy", "smiling": "Happy", "celebrate": "Joy",
    "celebrated": "Joy", "excited": "Joy", "delighted": "Delight",
    "grateful": "Joy", "love": "Joy", "loved": "Joy", "loving": "Joy",
    # Sadness
    "cry": "Sad", "cried": "Sad", "crying": "Sad", "sad": "Sad",
    "miss": "Sad", "missed": "Sad", "missing": "Sad", "grieve": "Grief",
    "grieving": "Grief", "mourn": "Grief", "hurt": "Sad", "hurting": "Sad",
    "depressed": "Depression", "lost": "Sad",
    # Anger
    "angry": "Angry", "hate": "Anger", "hated": "Anger", "yell": "Anger",
    "yelled": "Anger", "yelling": "Anger", "shout": "Anger",
    "shouted": "Anger", "frustrated": "Frustration", "annoyed": "Anger",
    "irritated": "Anger", "resent": "Anger", "furious": "Rage",
    # Contentment
    "relax": "Calm", "relaxed": "Calm", "relaxing": "Calm", "rest": "Calm",
    "rested": "Calm", "breathe": "Calm", "breathing": "Calm",
    "appreciate": "Contentment", "appreciated": "Contentment",
    "content": "Contentment", "calm": "Calm",
    # Confusion
    "wonder": "Confusion", "wondering": "Confusion", "confused": "Confusion",
    "doubt": "Confusion", "doubted": "Confusion", "hesitate": "Confusion",
    # Overwhelm
    "overwhelmed": "Overwhelm", "stressed": "Stress", "struggle": "Stress",
    "struggled": "Stress", "struggling": "Stress", "rushing": "Stress",
    "drowning": "Overwhelm",
    # Loneliness
    "lonely": "Loneliness", "isolated": "Isolation", "abandoned": "Loneliness",
    "ignored": "Loneliness", "rejected": "Loneliness",
    # Neutral, emotion-adjacent verbs
    "feel": "Neutral", "feeling": "Neutral", "felt": "Neutral",
    "think": "Neutral", "thought": "Neutral", "want": "Neutral",
    "wanted": "Neutral", "need": "Neutral", "needed": "Neutral",
    "try": "Neutral", "tried": "Neutral", "trying": "Neutral",
    "hope": "Joy", "hoped": "Joy", "hoping": "Joy",
}

SUBJECT_LEXICON: dict[str, str] = {
    # Joy
    "joy": "Joy", "happiness": "Happy", "friend": "Joy", "friends": "Joy",
    "celebration": "Joy", "laughter": "Joy", "gift": "Joy", "vacation": "Joy",
    "sunshine": "Joy", "success": "Joy", "gratitude": "Joy",
    # Anxiety
    "anxiety": "Anxiety", "panic": "Panic", "deadline": "Anxiety",
    "exam": "Anxiety", "interview": "Anxiety", "danger": "Fear",
    "nightmare": "Fear",
    # Sadness
    "sadness": "Sadness", "tears": "Sad", "grief": "Grief", "loss": "Grief",
    "funeral": "Grief", "depression": "Depression", "heartbreak": "Sad",
    # Anger
    "anger": "Anger", "argument": "Anger", "fight": "Anger",
    "rage": "Rage", "conflict": "Anger", "injustice": "Anger",
    # Contentment
    "peace": "Peace", "calmness": "Calm", "nature": "Calm", "garden": "Calm",
    "music": "Contentment", "home": "Contentment", "comfort": "Contentment",
    # Confusion
    "confusion": "Confusion", "question": "Confusion",
    "uncertainty": "Confusion", "decision": "Confusion",
    # Overwhelm
    "stress": "Stress", "pressure": "Overwhelm", "workload": "Overwhelm",
    "chaos": "Overwhelm", "burden": "Overwhelm",
    # Loneliness
    "loneliness": "Loneliness", "isolation": "Isolation",
    "silence": "Loneliness",
    # Neutral anchors
    "heart": "Neutral", "family": "Neutral", "work": "Neutral",
    "job": "Neutral", "school": "Neutral", "mother": "Neutral",
    "father": "Neutral", "partner": "Neutral", "body": "Neutral",
    "sleep": "Neutral", "morning": "Neutral", "night": "Neutral",
    "day": "Neutral", "week": "Neutral", "life": "Neutral",
    "mind": "Neutral", "time": "Neutral", "people": "Neutral",
}

ACTION_SUFFIXES: tuple[str, ...] = ("ing", "ed", "ize", "ise", "ate", "ify", "en")

#: Baseline sentiment in [0, 1] for each canonical tone.
TONE_SENTIMENT: dict[str, float] = {
    "Joy": 0.85,
    "Contentment": 0.75,
    "Neutral": 0.5,
    "Confusion": 0.4,
    "Overwhelm": 0.3,
    "Anxiety": 0.25,
    "Loneliness": 0.25,
    "Anger": 0.2,
    "Sadness": 0.15,
}

POSITIVE_CUES: frozenset[str] = frozenset({
    "good", "great", "excellent", "happy", "joy", "love", "wonderful",
    "grateful", "calm", "hope", "friend", "friends", "peace",
})

NEGATIVE_CUES: frozenset[str] = frozenset({
    "bad", "awful", "terrible", "sad", "angry", "hate", "horrible",
    "afraid", "hurt", "lost", "lonely", "panic", "fear",
})

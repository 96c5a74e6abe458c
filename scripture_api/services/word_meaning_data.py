"""Static lookup tables behind the word meaning analysis."""

TELUGU_TRANSLATIONS = {
    "love": "ప్రేమ",
    "light": "వెలుగు",
    "peace": "శాంతి",
    "hope": "ఆశ",
    "faith": "విశ్వాసం",
    "truth": "సత్యం",
    "grace": "కృప",
    "mercy": "దయ",
    "joy": "ఆనందం",
    "prayer": "ప్రార్థన",
    "blessing": "ఆశీర్వాదం",
    "worship": "ఆరాధన",
    "praise": "స్తుతి",
    "glory": "మహిమ",
    "salvation": "రక్షణ",
    "forgiveness": "క్షమాపణ",
    "righteousness": "నీతి",
    "kingdom": "రాజ్యం",
    "eternal": "శాశ్వత",
    "holy": "పవిత్ర",
    "god": "దేవుడు",
    "heaven": "స్వర్గం",
    "earth": "భూమి",
    "water": "నీరు",
    "fire": "అగ్ని",
    "spirit": "ఆత్మ",
    "word": "వాక్యం",
    "life": "జీవితం",
    "death": "మరణం",
    "birth": "జన్మ",
    "heart": "హృదయం",
    "soul": "ఆత్మ",
    "mind": "మనసు",
    "strength": "బలం",
    "power": "శక్తి",
    "wisdom": "జ్ఞానం",
    "knowledge": "తెలివి",
}

EXPLANATIONS = {
    "love": (
        "Love is a profound and caring affection towards someone or something. In biblical context, "
        "love represents the highest virtue - God's unconditional care for humanity and the commandment "
        "to love God and neighbor. It encompasses agape (divine love), phileo (brotherly love), and eros "
        "(romantic love). Love is patient, kind, and never fails."
    ),
    "light": (
        "Light is the natural agent that makes vision possible and dispels darkness. Biblically, light "
        "symbolizes divine truth, righteousness, knowledge, and God's presence. Jesus declared \"I am the "
        "light of the world,\" representing spiritual illumination and guidance that leads people out of "
        "spiritual darkness."
    ),
    "peace": (
        "Peace is a state of harmony, tranquility, and freedom from conflict or anxiety. In scripture, "
        "peace (Hebrew: shalom) means completeness, wholeness, and well-being that comes from being "
        "reconciled with God through Christ. It surpasses human understanding and guards our hearts."
    ),
    "hope": (
        "Hope is confident expectation and trust in future good. Biblical hope is not wishful thinking "
        "but assured confidence in God's promises and His faithfulness to fulfill them, providing strength "
        "during trials and anchor for the soul."
    ),
    "faith": (
        "Faith is complete trust, confidence, and belief in God and His word. It involves both "
        "intellectual assent and personal commitment, described as \"the substance of things hoped for, "
        "the evidence of things not seen.\" Faith is essential for pleasing God."
    ),
    "truth": (
        "Truth is conformity to fact or reality; that which is genuine and authentic. In biblical terms, "
        "truth refers to God's revealed word, divine reality, and Jesus who declared \"I am the way, the "
        "truth, and the life.\" Truth sets people free."
    ),
    "grace": (
        "Grace is God's unmerited favor and divine assistance given to humans. It represents God's love, "
        "mercy, and blessing freely given to those who don't deserve it, enabling salvation and spiritual "
        "growth through Jesus Christ."
    ),
    "mercy": (
        "Mercy is compassionate treatment and forgiveness toward those who deserve punishment. Divine "
        "mercy represents God's loving-kindness and willingness to forgive sins and show compassion to "
        "humanity despite our failures."
    ),
    "joy": (
        "Joy is a deep sense of happiness, delight, and contentment. Biblical joy transcends circumstances "
        "and comes from knowing God, experiencing His salvation, and understanding one's relationship with "
        "Him. Joy is a fruit of the Spirit."
    ),
    "prayer": (
        "Prayer is communication with God through worship, petition, thanksgiving, and confession. It "
        "involves speaking to and listening to God, building relationship and seeking His will and "
        "guidance in all aspects of life."
    ),
}

DEFAULT_EXPLANATION = (
    "{word} is a significant term with deep meaning in both everyday usage and biblical literature. "
    "It carries important theological, spiritual, and practical implications for understanding faith "
    "and human experience."
)

EXAMPLE_SENTENCES = {
    "love": [
        "We are commanded to love God with all our heart, soul, mind, and strength.",
        "God so loved the world that He gave His only begotten Son.",
        "Love your enemies and pray for those who persecute you.",
        "Above all, love each other deeply, because love covers many sins.",
    ],
    "light": [
        'Jesus said, "I am the light of the world; whoever follows me will not walk in darkness."',
        "Your word is a lamp to my feet and a light to my path.",
        "Let your light shine before others, that they may see your good deeds.",
        "God is light, and in Him there is no darkness at all.",
    ],
    "peace": [
        "Peace I leave with you; my peace I give you, says the Lord.",
        "Blessed are the peacemakers, for they will be called children of God.",
        "The peace of God, which surpasses all understanding, will guard your hearts.",
        "He himself is our peace, who has made the two groups one.",
    ],
    "hope": [
        "We have this hope as an anchor for the soul, firm and secure.",
        "May the God of hope fill you with all joy and peace as you trust in Him.",
        "Hope does not put us to shame, because God's love has been poured out.",
        "Through Christ we have gained access by faith into this grace and rejoice in hope.",
    ],
    "faith": [
        "Now faith is confidence in what we hope for and assurance about what we do not see.",
        "Without faith it is impossible to please God.",
        "We live by faith, not by sight.",
        "Faith comes by hearing, and hearing by the word of God.",
    ],
}

DEFAULT_EXAMPLES = (
    'The word "{word}" appears frequently in biblical literature with deep spiritual significance.',
    'Understanding "{word}" helps us grasp important theological concepts.',
    '"{word}" carries both practical and spiritual meaning in Christian faith.',
    'Scripture uses "{word}" to convey essential truths about God and humanity.',
)

# base, past, past participle, present participle, third person singular
IRREGULAR_VERBS = {
    "love": ("love", "loved", "loved", "loving", "loves"),
    "be": ("be", "was/were", "been", "being", "is/are"),
    "have": ("have", "had", "had", "having", "has"),
    "do": ("do", "did", "done", "doing", "does"),
    "go": ("go", "went", "gone", "going", "goes"),
    "see": ("see", "saw", "seen", "seeing", "sees"),
    "know": ("know", "knew", "known", "knowing", "knows"),
    "come": ("come", "came", "come", "coming", "comes"),
    "give": ("give", "gave", "given", "giving", "gives"),
    "take": ("take", "took", "taken", "taking", "takes"),
    "find": ("find", "found", "found", "finding", "finds"),
    "think": ("think", "thought", "thought", "thinking", "thinks"),
    "say": ("say", "said", "said", "saying", "says"),
    "get": ("get", "got", "gotten", "getting", "gets"),
    "make": ("make", "made", "made", "making", "makes"),
    "believe": ("believe", "believed", "believed", "believing", "believes"),
    "pray": ("pray", "prayed", "prayed", "praying", "prays"),
    "worship": ("worship", "worshipped", "worshipped", "worshipping", "worships"),
    "serve": ("serve", "served", "served", "serving", "serves"),
    "praise": ("praise", "praised", "praised", "praising", "praises"),
    "trust": ("trust", "trusted", "trusted", "trusting", "trusts"),
    "hope": ("hope", "hoped", "hoped", "hoping", "hopes"),
    "forgive": ("forgive", "forgave", "forgiven", "forgiving", "forgives"),
    "bless": ("bless", "blessed", "blessed", "blessing", "blesses"),
}

BIBLICAL_SITES = ("en.wikipedia.org", "biblegateway.com", "gotquestions.org")

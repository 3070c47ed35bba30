"""
Recommended Study Topics
Curated topics for guided Bible study. Each topic walks through context,
the scholar's reading, group discussion and personal application.
Only English topics exist today; other languages get an empty list.
"""

DIFFICULTY_LEVELS = ["beginner", "intermediate", "advanced"]

RECOMMENDED_TOPICS = {
    "en": [
        {
            "id": "rg-001",
            "title": "Understanding Biblical Context",
            "description": "Learn to read Scripture within its historical and cultural setting",
            "difficulty_level": "beginner",
            "estimated_duration": "45 minutes",
            "key_verses": ["2 Timothy 3:16-17", "Nehemiah 8:1-8", "Acts 17:11"],
            "category": "Bible Study Methods",
            "tags": ["context", "interpretation", "hermeneutics"],
        },
        {
            "id": "rg-002",
            "title": "The Scholar's Approach to Scripture",
            "description": "Discovering what the text meant to its original audience",
            "difficulty_level": "intermediate",
            "estimated_duration": "60 minutes",
            "key_verses": ["1 Corinthians 2:14", "Luke 24:13-35", "Acts 8:30-31"],
            "category": "Bible Study Methods",
            "tags": ["scholarship", "original meaning", "exegesis"],
        },
        {
            "id": "rg-003",
            "title": "Group Discussion Dynamics",
            "description": "Facilitating meaningful biblical conversations",
            "difficulty_level": "intermediate",
            "estimated_duration": "50 minutes",
            "key_verses": ["Proverbs 27:17", "Ecclesiastes 4:12", "Hebrews 10:24-25"],
            "category": "Group Leadership",
            "tags": ["discussion", "community", "facilitation"],
        },
        {
            "id": "rg-004",
            "title": "Personal Application of Scripture",
            "description": "Moving from understanding to life transformation",
            "difficulty_level": "beginner",
            "estimated_duration": "40 minutes",
            "key_verses": ["James 1:22-25", "Luke 6:46-49", "John 14:15"],
            "category": "Spiritual Growth",
            "tags": ["application", "transformation", "obedience"],
        },
        {
            "id": "rg-005",
            "title": "The Gospel in the Old Testament",
            "description": "Seeing Christ throughout the Hebrew Scriptures",
            "difficulty_level": "advanced",
            "estimated_duration": "75 minutes",
            "key_verses": ["Luke 24:27", "John 5:39", "Isaiah 53:1-12"],
            "category": "Biblical Theology",
            "tags": ["gospel", "christology", "old testament"],
        },
        {
            "id": "rg-006",
            "title": "Prayer and Scripture Study",
            "description": "Integrating prayer into Bible study for spiritual insight",
            "difficulty_level": "beginner",
            "estimated_duration": "35 minutes",
            "key_verses": ["Psalm 119:18", "1 Corinthians 2:10-14", "John 16:13"],
            "category": "Spiritual Disciplines",
            "tags": ["prayer", "illumination", "holy spirit"],
        },
        {
            "id": "rg-007",
            "title": "Character Studies in Scripture",
            "description": "Learning from biblical characters and their journeys",
            "difficulty_level": "intermediate",
            "estimated_duration": "55 minutes",
            "key_verses": ["1 Corinthians 10:11", "Romans 15:4", "Hebrews 11:1-40"],
            "category": "Biblical Characters",
            "tags": ["biography", "character", "examples"],
        },
        {
            "id": "rg-008",
            "title": "Understanding Biblical Covenants",
            "description": "Exploring God's covenant relationship with humanity",
            "difficulty_level": "advanced",
            "estimated_duration": "70 minutes",
            "key_verses": ["Genesis 12:1-3", "Jeremiah 31:31-34", "Hebrews 8:6-13"],
            "category": "Biblical Theology",
            "tags": ["covenant", "relationship", "promise"],
        },
        {
            "id": "rg-009",
            "title": "The Parables of Jesus",
            "description": "Understanding the teaching method of Christ",
            "difficulty_level": "intermediate",
            "estimated_duration": "50 minutes",
            "key_verses": ["Matthew 13:3-23", "Mark 4:33-34", "Luke 8:4-15"],
            "category": "New Testament Studies",
            "tags": ["parables", "teaching", "kingdom"],
        },
        {
            "id": "rg-010",
            "title": "Spiritual Warfare and Victory",
            "description": "Biblical understanding of our battle and Christ's victory",
            "difficulty_level": "intermediate",
            "estimated_duration": "60 minutes",
            "key_verses": ["Ephesians 6:10-18", "2 Corinthians 10:3-5", "1 John 4:4"],
            "category": "Spiritual Growth",
            "tags": ["warfare", "victory", "armor"],
        },
        {
            "id": "rg-011",
            "title": "Love and Relationships",
            "description": "Biblical foundations for healthy relationships",
            "difficulty_level": "beginner",
            "estimated_duration": "45 minutes",
            "key_verses": ["1 Corinthians 13:1-13", "John 13:34-35", "Ephesians 5:21-33"],
            "category": "Christian Living",
            "tags": ["love", "relationships", "community"],
        },
        {
            "id": "rg-012",
            "title": "Forgiveness and Grace",
            "description": "Understanding God's forgiveness and extending it to others",
            "difficulty_level": "beginner",
            "estimated_duration": "50 minutes",
            "key_verses": ["Ephesians 4:32", "Matthew 6:14-15", "Colossians 3:13"],
            "category": "Christian Living",
            "tags": ["forgiveness", "grace", "reconciliation"],
        },
        {
            "id": "rg-013",
            "title": "Faith and Doubt",
            "description": "Navigating seasons of doubt and growing in faith",
            "difficulty_level": "intermediate",
            "estimated_duration": "55 minutes",
            "key_verses": ["Mark 9:24", "James 1:6-8", "Hebrews 11:1"],
            "category": "Spiritual Growth",
            "tags": ["faith", "doubt", "trust"],
        },
        {
            "id": "rg-014",
            "title": "Worship and Praise",
            "description": "Biblical foundations for authentic worship",
            "difficulty_level": "beginner",
            "estimated_duration": "40 minutes",
            "key_verses": ["John 4:23-24", "Psalm 150:1-6", "Romans 12:1"],
            "category": "Spiritual Disciplines",
            "tags": ["worship", "praise", "heart"],
        },
        {
            "id": "rg-015",
            "title": "Suffering and Hope",
            "description": "Finding hope and purpose in times of suffering",
            "difficulty_level": "advanced",
            "estimated_duration": "65 minutes",
            "key_verses": ["Romans 8:28", "2 Corinthians 1:3-4", "1 Peter 4:12-19"],
            "category": "Life Challenges",
            "tags": ["suffering", "hope", "perseverance"],
        },
    ],
}

"""Bundled emoji lookup table: (key, glyph, name, shortcodes, keywords)."""

EMOJI_CATALOG = (
    ("joy", "😂", "Face with Tears of Joy", (":joy:", ":face_with_tears_of_joy:"), ("happy", "funny", "laugh", "lol", "tears")),
    ("rofl", "🤣", "Rolling on the Floor Laughing", (":rofl:", ":rolling_on_the_floor_laughing:"), ("laugh", "funny", "lol", "floor")),
    ("grinning", "😀", "Grinning Face", (":grinning:",), ("happy", "smile", "grin", "joy")),
    ("smiley", "😃", "Grinning Face with Big Eyes", (":smiley:",), ("happy", "smile", "joy", "open mouth")),
    ("smile", "😄", "Grinning Face with Smiling Eyes", (":smile:",), ("happy", "smile", "joy", "laugh")),
    ("grin", "😁", "Beaming Face with Smiling Eyes", (":grin:",), ("happy", "smile", "grin", "teeth")),
    ("laughing", "😆", "Grinning Squinting Face", (":laughing:", ":satisfied:"), ("happy", "laugh", "haha", "satisfied")),
    ("sweat_smile", "😅", "Grinning Face with Sweat", (":sweat_smile:",), ("relief", "smile", "nervous", "phew")),
    ("slightly_smiling_face", "🙂", "Slightly Smiling Face", (":slightly_smiling_face:",), ("smile", "ok", "fine")),
    ("upside_down_face", "🙃", "Upside-Down Face", (":upside_down_face:",), ("silly", "sarcasm")),
    ("wink", "😉", "Winking Face", (":wink:",), ("flirt", "joke", "wink")),
    ("blush", "😊", "Smiling Face with Smiling Eyes", (":blush:",), ("smile", "happy", "blush", "proud")),
    ("innocent", "😇", "Smiling Face with Halo", (":innocent:",), ("angel", "halo", "smile", "innocent")),
    ("heart_eyes", "😍", "Smiling Face with Heart-Eyes", (":heart_eyes:",), ("love", "crush", "smile", "heart")),
    ("star_struck", "🤩", "Star-Struck", (":star_struck:",), ("excited", "star", "wow")),
    ("kissing_heart", "😘", "Face Blowing a Kiss", (":kissing_heart:",), ("love", "kiss", "flirt")),
    ("yum", "😋", "Face Savoring Food", (":yum:",), ("tasty", "delicious", "food")),
    ("stuck_out_tongue", "😛", "Face with Tongue", (":stuck_out_tongue:",), ("tongue", "silly", "playful")),
    ("thinking", "🤔", "Thinking Face", (":thinking:",), ("hmm", "think", "consider", "doubt")),
    ("neutral_face", "😐", "Neutral Face", (":neutral_face:",), ("meh", "blank", "neutral")),
    ("expressionless", "😑", "Expressionless Face", (":expressionless:",), ("blank", "meh", "deadpan")),
    ("unamused", "😒", "Unamused Face", (":unamused:",), ("meh", "unhappy", "bored")),
    ("roll_eyes", "🙄", "Face with Rolling Eyes", (":roll_eyes:",), ("eyeroll", "annoyed", "whatever")),
    ("smirk", "😏", "Smirking Face", (":smirk:",), ("smug", "flirt", "sly")),
    ("relieved", "😌", "Relieved Face", (":relieved:",), ("calm", "relief", "content")),
    ("sleeping", "😴", "Sleeping Face", (":sleeping:",), ("sleep", "tired", "zzz")),
    ("sunglasses", "😎", "Smiling Face with Sunglasses", (":sunglasses:",), ("cool", "sun", "smile")),
    ("nerd_face", "🤓", "Nerd Face", (":nerd_face:",), ("geek", "nerd", "glasses")),
    ("confused", "😕", "Confused Face", (":confused:",), ("confused", "unsure")),
    ("worried", "😟", "Worried Face", (":worried:",), ("worry", "concern", "nervous")),
    ("cry", "😢", "Crying Face", (":cry:",), ("sad", "tear", "cry")),
    ("sob", "😭", "Loudly Crying Face", (":sob:",), ("sad", "cry", "tears", "bawl")),
    ("angry", "😠", "Angry Face", (":angry:",), ("mad", "annoyed", "angry")),
    ("rage", "😡", "Enraged Face", (":rage:", ":pout:"), ("mad", "angry", "furious")),
    ("scream", "😱", "Face Screaming in Fear", (":scream:",), ("fear", "shock", "horror")),
    ("flushed", "😳", "Flushed Face", (":flushed:",), ("embarrassed", "blush", "shy")),
    ("partying_face", "🥳", "Partying Face", (":partying_face:",), ("party", "celebration", "birthday")),
    ("thumbsup", "👍", "Thumbs Up", (":thumbsup:", ":+1:"), ("like", "approve", "ok", "yes")),
    ("thumbsdown", "👎", "Thumbs Down", (":thumbsdown:", ":-1:"), ("dislike", "no", "disapprove")),
    ("clap", "👏", "Clapping Hands", (":clap:",), ("applause", "praise", "bravo")),
    ("wave", "👋", "Waving Hand", (":wave:",), ("hello", "bye", "hi")),
    ("pray", "🙏", "Folded Hands", (":pray:",), ("please", "thanks", "hope")),
    ("ok_hand", "👌", "OK Hand", (":ok_hand:",), ("ok", "perfect", "fine")),
    ("muscle", "💪", "Flexed Biceps", (":muscle:",), ("strong", "flex", "power")),
    ("eyes", "👀", "Eyes", (":eyes:",), ("look", "see", "watch")),
    ("heart", "❤️", "Red Heart", (":heart:",), ("love", "like", "heart")),
    ("broken_heart", "💔", "Broken Heart", (":broken_heart:",), ("sad", "breakup", "heart")),
    ("fire", "🔥", "Fire", (":fire:",), ("hot", "lit", "flame")),
    ("sparkles", "✨", "Sparkles", (":sparkles:",), ("shiny", "new", "magic")),
    ("star", "⭐", "Star", (":star:",), ("favorite", "night")),
    ("tada", "🎉", "Party Popper", (":tada:",), ("party", "celebration", "congrats")),
    ("rocket", "🚀", "Rocket", (":rocket:",), ("launch", "ship", "space")),
    ("100", "💯", "Hundred Points", (":100:",), ("perfect", "score", "hundred")),
    ("white_check_mark", "✅", "Check Mark Button", (":white_check_mark:",), ("done", "yes", "ok")),
    ("x", "❌", "Cross Mark", (":x:",), ("no", "wrong", "delete")),
    ("warning", "⚠️", "Warning", (":warning:",), ("caution", "alert")),
    ("coffee", "☕", "Hot Beverage", (":coffee:",), ("drink", "cafe", "tea")),
    ("pizza", "🍕", "Pizza", (":pizza:",), ("food", "slice")),
    ("cat", "🐱", "Cat Face", (":cat:",), ("pet", "kitten", "meow")),
    ("dog", "🐶", "Dog Face", (":dog:",), ("pet", "puppy", "woof")),
)

"""Canned dossier and draft returned by the mock backend.

Lets the whole pipeline (CLI included) run offline and deterministically.
"""

DEMO_RESEARCH = {
    "summary": (
        "Dropshipping is a retail fulfillment method where sellers don't keep products in stock. "
        "Instead, they transfer customer orders to suppliers who ship directly. While marketed as "
        "'passive income,' the reality involves 85%+ failure rates, razor-thin margins (5-15%), "
        "and constant platform/supplier issues."
    ),
    "ethicalRating": 3,
    "profitPotential": "Low for 90%+, Moderate for those with significant capital and expertise",
    "marketStats": [
        {"label": "Failure Rate (Year 1)", "value": "85-90%", "context": "Most quit within 6 months due to no sales or negative ROI"},
        {"label": "Median Monthly Profit", "value": "$200-500", "context": "After 6+ months, excluding the 85% who make $0"},
        {"label": "Average Startup Cost", "value": "$2,000-5,000", "context": "Real cost including ads, apps, samples"},
        {"label": "Market Saturation", "value": "Extreme", "context": "Same products sold by 1000s of stores with identical margins"},
    ],
    "hiddenCosts": [
        {"label": "Shopify + Apps", "value": "$100-300/mo", "context": "Basic store, email, reviews, upsells add up fast"},
        {"label": "Ad Spend (Minimum)", "value": "$500-2000/mo", "context": "Required to test products; most is wasted on non-converters"},
        {"label": "Product Samples", "value": "$200-500", "context": "To verify quality before selling"},
        {"label": "Refunds/Chargebacks", "value": "10-20% of revenue", "context": "Long shipping times = angry customers = disputes"},
    ],
    "caseStudies": [
        {
            "name": "Mike T.",
            "type": "LOSER",
            "background": "30yo software engineer looking for side income",
            "strategy": "Followed YouTube guru course, sold pet products",
            "outcome": "Spent $4,200 on ads, made $800 in sales, quit after 4 months",
            "revenue": "-$3,400",
        },
        {
            "name": "Sarah K.",
            "type": "LOSER",
            "background": "Stay-at-home mom, saved $2,000 to start",
            "strategy": "General store approach, Facebook ads",
            "outcome": "Store suspended for policy violations, supplier ghosted her",
            "revenue": "-$2,000",
        },
        {
            "name": "James L.",
            "type": "WINNER",
            "background": "Former Amazon FBA seller with $50k capital",
            "strategy": "Branded store, US suppliers, premium pricing",
            "outcome": "After 18 months and multiple pivots, hit $15k/mo profit",
            "revenue": "$15,000/mo",
        },
    ],
    "affiliates": [
        {"program": "Shopify Partner", "potential": "High", "type": "WRITER", "commission": "$58-150 per signup", "notes": "Every guru is a Shopify affiliate"},
        {"program": "Oberlo/DSers", "potential": "Medium", "type": "PARTICIPANT", "commission": "20-30% recurring", "notes": "Dropship apps pay recurring for referrals"},
        {"program": "Course Sales", "potential": "Very High", "type": "WRITER", "commission": "$200-1000 per sale", "notes": "The real money: selling the dream, not doing it"},
    ],
}

DEMO_DRAFT = {
    "title": "The Dropshipping Delusion",
    "subtitle": "Why 90% Fail and What They Won't Tell You",
    "frontCover": {
        "titleText": "THE DROPSHIPPING DELUSION",
        "subtitleText": "The Uncomfortable Truth About 'Passive Income'",
        "visualDescription": (
            "A shattered laptop screen showing an empty Shopify dashboard, surrounded by unpaid "
            "bills and a 'GURU COURSE COMPLETE' certificate"
        ),
    },
    "backCover": {
        "blurb": (
            "Everyone's selling the dream. We're selling the truth. Before you invest your savings "
            "in another 'proven system,' read what 85% of dropshippers wish they'd known."
        ),
        "visualDescription": "Stack of returns packages and a sad cartoon wallet with moths flying out",
    },
    "chapters": [
        {
            "number": 1,
            "title": "THE LIE: Passive Income from Your Couch",
            "content": (
                "## The Seductive Promise\n\nScroll through YouTube for five minutes and you'll see it: "
                "a 22-year-old in a rented Lamborghini telling you how he makes $50,000/month 'while sleeping.'\n\n"
                "**The Reality Check**\n\n- The 85% failure rate within year one\n"
                "- The median profit of $200-500/month (for survivors)\n"
                "- The 'passive' income requiring 40+ hours/week of customer service"
            ),
            "posiBotQuotes": [
                {"position": "RIGHT", "text": "Failure is just success in disguise!"},
                {"position": "LEFT", "text": "Statistics are for quitters!"},
            ],
            "visuals": [
                {"type": "CHART", "description": "Bar chart comparing 'Guru Claims' ($10k/mo passive) vs 'Reality' ($200/mo median)", "caption": "Promise vs Reality"},
                {"type": "HERO", "description": "Split image: yacht/laptop lifestyle vs person stressed at 2am handling complaints", "caption": "Expectation vs Reality"},
            ],
        },
        {
            "number": 2,
            "title": "THE MATH: The $50 Startup That Costs $5,000",
            "content": (
                "## Official vs Actual Costs\n\n**What Gurus Say:** $41 to start!\n\n"
                "**What It Actually Costs (First 3 Months):** $2,317-4,567, before any course."
            ),
            "posiBotQuotes": [
                {"position": "RIGHT", "text": "Math is just a mindset!"},
            ],
            "visuals": [
                {"type": "CHART", "description": "Waterfall chart from $41 'advertised' to $4,500 real first-quarter cost", "caption": "The True Cost Waterfall"},
            ],
        },
        {
            "number": 3,
            "title": "ALTERNATIVES: What Smart People Actually Do",
            "content": (
                "## Better Uses of Your Time and Money\n\n1. Freelance in your existing skills\n"
                "2. Keep your job and build on the side\n3. Put the $5,000 in an index fund"
            ),
            "posiBotQuotes": [],
            "visuals": [
                {"type": "DIAGRAM", "description": "Expected value of each path over 5 years", "caption": "Expected Value Analysis"},
            ],
        },
    ],
}

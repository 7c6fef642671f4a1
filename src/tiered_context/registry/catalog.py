"""Bundled artifact catalog: input fields and generatable resource nodes.

Node order matters: it is the registry insertion order used to break ties
when computing a generation order.
"""

from __future__ import annotations

from tiered_context.registry.models import InputField, ResourceNode

INPUT_FIELDS: tuple[InputField, ...] = (
    InputField("product-name", "Product Name", "Name of the product being sold."),
    InputField("product-description", "Product Description", "Free-text product description."),
    InputField("current-business-stage", "Current Business Stage", "Revenue / team stage today."),
    InputField("primary-benefit", "Primary Benefit", "The single most important benefit."),
    InputField("startup-stage", "Startup Stage", "Funding stage of the company."),
    InputField("target-buyer-description", "Target Buyer Description", "Who the founder sells to."),
    InputField("product-category", "Product Category", "Market category of the product."),
    InputField("product-unique-differentiator", "Unique Differentiator", "What competitors cannot claim."),
    InputField("product-tangible-benefits", "Tangible Benefits", "Measurable outcomes for buyers."),
    InputField("product-value-proposition", "Value Proposition", "One-line value proposition."),
    InputField("business-goal", "Business Goal", "The next business milestone."),
    InputField("desert-context", "Desert Context", "Founder-supplied market backdrop."),
)

RESOURCE_NODES: tuple[ResourceNode, ...] = (
    # ── Tier 1: core foundation ──────────────────────────────────────
    ResourceNode(
        id="icp-analysis",
        name="ICP Analysis",
        tier=1,
        category="core",
        required_dependencies=("product-name", "product-description", "current-business-stage"),
        estimated_tokens=1200,
        generation_cost=0.0036,
        impact_statement=(
            "Defines your ideal customer with surgical precision, eliminating wasted "
            "sales effort on bad-fit prospects."
        ),
    ),
    ResourceNode(
        id="target-buyer-personas",
        name="Target Buyer Personas",
        tier=1,
        category="core",
        required_dependencies=("product-name", "product-description", "icp-analysis"),
        estimated_tokens=1500,
        generation_cost=0.0045,
        impact_statement=(
            "Brings your target buyers to life as real people with specific fears, "
            "goals, and communication preferences."
        ),
    ),
    ResourceNode(
        id="empathy-maps",
        name="Empathy Maps",
        tier=1,
        category="core",
        required_dependencies=(
            "product-name",
            "product-description",
            "icp-analysis",
            "target-buyer-personas",
        ),
        estimated_tokens=1400,
        generation_cost=0.0042,
        impact_statement=(
            "Reveals what your buyers see, hear, think, feel, say, do, fear, and desire."
        ),
    ),
    ResourceNode(
        id="refined-product-description",
        name="Refined Product Description",
        tier=1,
        category="core",
        required_dependencies=("product-name", "product-description", "primary-benefit"),
        estimated_tokens=800,
        generation_cost=0.0024,
        impact_statement=(
            "Translates technical jargon into clear business language that enterprise "
            "buyers immediately understand."
        ),
    ),
    ResourceNode(
        id="value-messaging",
        name="Value Messaging",
        tier=1,
        category="core",
        required_dependencies=(
            "product-name",
            "product-description",
            "icp-analysis",
            "target-buyer-personas",
        ),
        estimated_tokens=1300,
        generation_cost=0.0039,
        impact_statement=(
            "Creates persona-aligned value propositions, SEO keywords, messaging "
            "phrases, and outreach email templates."
        ),
    ),
    # ── Tier 2: buyer intelligence ───────────────────────────────────
    ResourceNode(
        id="icp-rating-system",
        name="ICP Rating System",
        tier=2,
        category="core",
        required_dependencies=("product-description", "icp-analysis"),
        optional_dependencies=("target-buyer-personas",),
        estimated_tokens=1100,
        generation_cost=0.0033,
        impact_statement=(
            "Turns abstract ICP criteria into a concrete scoring framework that "
            "prioritizes your highest-value prospects."
        ),
    ),
    ResourceNode(
        id="buyer-persona-rating",
        name="Buyer Persona Rating",
        tier=2,
        category="core",
        required_dependencies=("product-description", "target-buyer-personas"),
        optional_dependencies=("empathy-maps",),
        estimated_tokens=1000,
        generation_cost=0.003,
        impact_statement=(
            "Scores individual contacts on persona alignment so the sales team "
            "focuses on the right people."
        ),
    ),
    ResourceNode(
        id="negative-buyer-personas",
        name="Negative Buyer Personas",
        tier=2,
        category="core",
        required_dependencies=("product-name", "product-description", "icp-analysis"),
        optional_dependencies=("target-buyer-personas",),
        estimated_tokens=900,
        generation_cost=0.0027,
        impact_statement=(
            "Identifies bad-fit buyers within your ICP, preventing wasted cycles on "
            "prospects who will never close."
        ),
    ),
    ResourceNode(
        id="non-ideal-customer-profile",
        name="Non-Ideal Customer Profile",
        tier=2,
        category="core",
        required_dependencies=("product-description", "icp-analysis", "current-business-stage"),
        optional_dependencies=("target-buyer-personas",),
        estimated_tokens=1000,
        generation_cost=0.003,
        impact_statement=(
            "Defines which industries, company stages, and budget constraints to "
            "avoid entirely."
        ),
    ),
    # ── Tier 3: scoring & prioritization ─────────────────────────────
    ResourceNode(
        id="compelling-events",
        name="Compelling Events",
        tier=3,
        category="core",
        required_dependencies=(
            "product-description",
            "target-buyer-personas",
            "icp-analysis",
            "empathy-maps",
        ),
        optional_dependencies=("value-messaging",),
        estimated_tokens=1200,
        generation_cost=0.0036,
        impact_statement=(
            "Identifies the specific triggers that make buyers urgently seek your "
            "solution right now."
        ),
    ),
    ResourceNode(
        id="cost-of-inaction-calculator",
        name="Cost of Inaction Calculator",
        tier=3,
        category="core",
        required_dependencies=("icp-analysis", "product-description"),
        optional_dependencies=("target-buyer-personas", "compelling-events"),
        estimated_tokens=1500,
        generation_cost=0.0045,
        impact_statement=(
            "Quantifies the financial and competitive risks of delayed action."
        ),
    ),
    ResourceNode(
        id="product-potential-assessment",
        name="Product Potential Assessment",
        tier=3,
        category="core",
        required_dependencies=("product-description", "target-buyer-personas", "startup-stage"),
        optional_dependencies=("icp-analysis", "value-messaging"),
        estimated_tokens=1100,
        generation_cost=0.0033,
        impact_statement=(
            "Categorizes your product and identifies its unique differentiator and "
            "tangible benefits."
        ),
    ),
    ResourceNode(
        id="product-value-statistics",
        name="Product Value Statistics",
        tier=3,
        category="core",
        required_dependencies=("product-description", "target-buyer-personas"),
        optional_dependencies=("icp-analysis", "value-messaging"),
        estimated_tokens=1000,
        generation_cost=0.003,
        impact_statement=(
            "Arms your sales team with credible statistics that prove the product's "
            "market potential."
        ),
    ),
    # ── Tier 4: value communication ──────────────────────────────────
    ResourceNode(
        id="pmf-assessment",
        name="PMF Assessment",
        tier=4,
        category="core",
        required_dependencies=(
            "product-description",
            "target-buyer-description",
            "icp-analysis",
            "startup-stage",
        ),
        optional_dependencies=("target-buyer-personas", "empathy-maps"),
        estimated_tokens=1300,
        generation_cost=0.0039,
        impact_statement=(
            "Assesses product-market fit with actionable gaps and improvement actions."
        ),
    ),
    ResourceNode(
        id="pmf-readiness-assessment",
        name="PMF Readiness Assessment",
        tier=4,
        category="core",
        required_dependencies=(
            "product-name",
            "product-description",
            "product-category",
            "product-unique-differentiator",
            "product-tangible-benefits",
            "target-buyer-personas",
        ),
        optional_dependencies=("icp-analysis", "pmf-assessment"),
        estimated_tokens=1400,
        generation_cost=0.0042,
        impact_statement=(
            "Evaluates readiness for product-market fit across eight dimensions with "
            "concrete next steps."
        ),
    ),
    ResourceNode(
        id="potential-customers-list",
        name="Potential Customers List",
        tier=4,
        category="core",
        required_dependencies=("product-name", "product-description", "icp-analysis", "pmf-assessment"),
        optional_dependencies=("target-buyer-personas", "compelling-events"),
        estimated_tokens=1800,
        generation_cost=0.0054,
        impact_statement=(
            "Provides twenty target companies with compelling reasons to contact "
            "them now."
        ),
    ),
    ResourceNode(
        id="willingness-to-pay",
        name="Willingness to Pay",
        tier=4,
        category="core",
        required_dependencies=(
            "product-description",
            "target-buyer-personas",
            "product-value-proposition",
            "icp-analysis",
        ),
        optional_dependencies=("value-messaging", "cost-of-inaction-calculator"),
        estimated_tokens=1200,
        generation_cost=0.0036,
        impact_statement=(
            "Determines pricing strategy with specific price ranges buyers will accept."
        ),
    ),
    # ── Tier 5: sales enablement ─────────────────────────────────────
    ResourceNode(
        id="sales-slide-deck",
        name="Sales Slide Deck",
        tier=5,
        category="core",
        required_dependencies=(
            "product-name",
            "product-description",
            "target-buyer-personas",
            "value-messaging",
            "icp-analysis",
        ),
        optional_dependencies=("empathy-maps", "compelling-events", "cost-of-inaction-calculator"),
        estimated_tokens=2500,
        generation_cost=0.0075,
        impact_statement=(
            "Provides discovery, demo, and closing decks for enterprise sales cycles."
        ),
    ),
    ResourceNode(
        id="sales-tasks-basic",
        name="Sales Tasks (Basic)",
        tier=5,
        category="core",
        required_dependencies=(
            "product-description",
            "target-buyer-personas",
            "startup-stage",
            "business-goal",
        ),
        optional_dependencies=("icp-analysis", "value-messaging"),
        estimated_tokens=1100,
        generation_cost=0.0033,
        impact_statement=(
            "Prioritizes the critical sales tasks that reach your business goal fastest."
        ),
    ),
    ResourceNode(
        id="technical-sales-translator",
        name="Technical Sales Translator",
        tier=5,
        category="core",
        required_dependencies=(
            "product-name",
            "product-description",
            "target-buyer-personas",
            "icp-analysis",
        ),
        optional_dependencies=("empathy-maps", "value-messaging"),
        estimated_tokens=1400,
        generation_cost=0.0042,
        impact_statement=(
            "Transforms technical features into benefits that resonate with specific "
            "buyer personas."
        ),
    ),
    ResourceNode(
        id="product-market-clarity-translation",
        name="Product-Market Clarity Translation",
        tier=5,
        category="core",
        required_dependencies=(
            "product-name",
            "product-description",
            "target-buyer-personas",
            "icp-analysis",
        ),
        optional_dependencies=("empathy-maps", "desert-context"),
        estimated_tokens=1600,
        generation_cost=0.0048,
        impact_statement=(
            "Translates capabilities into four-layer messaging that addresses buyer "
            "fears and career wins."
        ),
    ),
    # ── Tier 6: advanced enterprise ──────────────────────────────────
    ResourceNode(
        id="persona-based-prototyping",
        name="Persona-Based Prototyping",
        tier=6,
        category="advanced",
        required_dependencies=("target-buyer-personas",),
        estimated_tokens=1500,
        generation_cost=0.0045,
    ),
    ResourceNode(
        id="product-potential-advanced",
        name="Product Potential (Advanced)",
        tier=6,
        category="advanced",
        required_dependencies=("product-potential-assessment",),
        estimated_tokens=1400,
        generation_cost=0.0042,
    ),
    ResourceNode(
        id="product-usage-assessments",
        name="Product Usage Assessments",
        tier=6,
        category="advanced",
        required_dependencies=("product-description",),
        estimated_tokens=1300,
        generation_cost=0.0039,
    ),
    ResourceNode(
        id="product-usage-timing-assessment",
        name="Product Usage Timing Assessment",
        tier=6,
        category="advanced",
        required_dependencies=("product-description",),
        estimated_tokens=1200,
        generation_cost=0.0036,
    ),
    ResourceNode(
        id="sales-tasks-advanced",
        name="Sales Tasks (Advanced)",
        tier=6,
        category="advanced",
        required_dependencies=("sales-tasks-basic",),
        estimated_tokens=1400,
        generation_cost=0.0042,
    ),
    ResourceNode(
        id="stakeholder-arsenal",
        name="Stakeholder Arsenal",
        tier=6,
        category="advanced",
        required_dependencies=("target-buyer-personas",),
        estimated_tokens=1500,
        generation_cost=0.0045,
    ),
    ResourceNode(
        id="user-journey-maps",
        name="User Journey Maps",
        tier=6,
        category="advanced",
        required_dependencies=("target-buyer-personas", "empathy-maps"),
        estimated_tokens=1600,
        generation_cost=0.0048,
    ),
    ResourceNode(
        id="buyer-ux-considerations",
        name="Buyer UX Considerations",
        tier=6,
        category="advanced",
        required_dependencies=("product-description", "target-buyer-personas", "user-journey-maps"),
        optional_dependencies=("empathy-maps", "day-in-life"),
        estimated_tokens=1300,
        generation_cost=0.0039,
        impact_statement=(
            "Identifies UX friction points that keep buyers from experiencing the "
            "product's value."
        ),
    ),
    ResourceNode(
        id="buying-committee-navigation-guide",
        name="Buying Committee Navigation Guide",
        tier=6,
        category="advanced",
        required_dependencies=("product-description", "target-buyer-personas", "icp-analysis"),
        optional_dependencies=("empathy-maps", "stakeholder-arsenal"),
        estimated_tokens=1500,
        generation_cost=0.0045,
        impact_statement=(
            "Maps the key stakeholders in enterprise deals and provides "
            "multi-threading strategies."
        ),
    ),
    ResourceNode(
        id="day-in-life",
        name="Day in the Life",
        tier=6,
        category="advanced",
        required_dependencies=("product-description", "target-buyer-personas", "empathy-maps"),
        optional_dependencies=("user-journey-maps",),
        estimated_tokens=1600,
        generation_cost=0.0048,
        impact_statement=(
            "Reveals the short moments where the product intersects with the buyer's "
            "daily reality."
        ),
    ),
    ResourceNode(
        id="ideal-head-of-sales",
        name="Ideal Head of Sales",
        tier=6,
        category="advanced",
        required_dependencies=(
            "product-description",
            "icp-analysis",
            "target-buyer-personas",
            "startup-stage",
        ),
        optional_dependencies=("sales-tasks-basic", "value-messaging"),
        estimated_tokens=1200,
        generation_cost=0.0036,
        impact_statement=(
            "Defines the ideal sales leader profile for your product, stage, and market."
        ),
    ),
    ResourceNode(
        id="mock-problem-validation",
        name="Mock Problem Validation",
        tier=6,
        category="advanced",
        required_dependencies=("product-description", "target-buyer-personas", "empathy-maps"),
        optional_dependencies=("compelling-events", "day-in-life"),
        estimated_tokens=1400,
        generation_cost=0.0042,
        impact_statement=(
            "Simulates customer validation interviews to test problem hypotheses."
        ),
    ),
    ResourceNode(
        id="mock-selling-dialogues",
        name="Mock Selling Dialogues",
        tier=6,
        category="advanced",
        required_dependencies=("product-description", "target-buyer-personas", "value-messaging"),
        optional_dependencies=("empathy-maps", "compelling-events", "sales-slide-deck"),
        estimated_tokens=1800,
        generation_cost=0.0054,
        impact_statement=(
            "Provides sales dialogue scripts with objection handling for each persona."
        ),
    ),
    ResourceNode(
        id="month-in-life",
        name="Month in the Life",
        tier=6,
        category="advanced",
        required_dependencies=(
            "product-description",
            "target-buyer-personas",
            "empathy-maps",
            "day-in-life",
        ),
        optional_dependencies=("user-journey-maps", "compelling-events"),
        estimated_tokens=2000,
        generation_cost=0.006,
        impact_statement=(
            "Maps monthly rhythms, quarterly pressures, and seasonal buying triggers."
        ),
    ),
    # ── Tier 7: strategic planning ───────────────────────────────────
    ResourceNode(
        id="service-blueprints",
        name="Service Blueprints",
        tier=7,
        category="strategic",
        required_dependencies=("product-description", "target-buyer-personas"),
        estimated_tokens=1600,
        generation_cost=0.0048,
    ),
    ResourceNode(
        id="board-presentation",
        name="Board Presentation",
        tier=7,
        category="strategic",
        required_dependencies=("icp-analysis", "value-messaging"),
        estimated_tokens=2000,
        generation_cost=0.006,
    ),
    ResourceNode(
        id="executive-business-case",
        name="Executive Business Case",
        tier=7,
        category="strategic",
        required_dependencies=("icp-analysis", "target-buyer-personas"),
        estimated_tokens=1800,
        generation_cost=0.0054,
    ),
    ResourceNode(
        id="ideal-investor-profile",
        name="Ideal Investor Profile",
        tier=7,
        category="strategic",
        required_dependencies=("icp-analysis", "startup-stage"),
        estimated_tokens=1300,
        generation_cost=0.0039,
    ),
    ResourceNode(
        id="jobs-to-be-done",
        name="Jobs to Be Done",
        tier=7,
        category="strategic",
        required_dependencies=("target-buyer-personas", "empathy-maps"),
        estimated_tokens=1500,
        generation_cost=0.0045,
    ),
    ResourceNode(
        id="roi-models",
        name="ROI Models",
        tier=7,
        category="strategic",
        required_dependencies=("product-description", "icp-analysis"),
        estimated_tokens=1600,
        generation_cost=0.0048,
    ),
    ResourceNode(
        id="scenario-planning",
        name="Scenario Planning",
        tier=7,
        category="strategic",
        required_dependencies=("icp-analysis",),
        estimated_tokens=1700,
        generation_cost=0.0051,
    ),
    ResourceNode(
        id="series-b-readiness",
        name="Series B Readiness",
        tier=7,
        category="strategic",
        required_dependencies=("startup-stage", "pmf-readiness-assessment"),
        estimated_tokens=1500,
        generation_cost=0.0045,
    ),
    # ── Tier 8: service operations ───────────────────────────────────
    ResourceNode(
        id="backstage-process-optimization",
        name="Backstage Process Optimization",
        tier=8,
        category="strategic",
        required_dependencies=("service-blueprints",),
        estimated_tokens=1400,
        generation_cost=0.0042,
    ),
    ResourceNode(
        id="service-fmea",
        name="Service FMEA",
        tier=8,
        category="strategic",
        required_dependencies=("service-blueprints",),
        estimated_tokens=1400,
        generation_cost=0.0042,
    ),
    ResourceNode(
        id="systems-interactions-map",
        name="Systems Interactions Map",
        tier=8,
        category="strategic",
        required_dependencies=("service-blueprints",),
        estimated_tokens=1500,
        generation_cost=0.0045,
    ),
    ResourceNode(
        id="detailed-service-prototype",
        name="Detailed Service Prototype",
        tier=8,
        category="advanced",
        required_dependencies=("product-description", "target-buyer-personas", "service-blueprints"),
        optional_dependencies=("user-journey-maps", "backstage-process-optimization"),
        estimated_tokens=1700,
        generation_cost=0.0051,
        impact_statement=(
            "Creates service design prototypes showing front-stage and back-stage "
            "processes."
        ),
    ),
)
